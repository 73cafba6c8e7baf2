from __future__ import annotations

from urllib.parse import quote

import httpx

from pokedex_bff.core.log import logger


class PokeApiError(Exception):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class PokeApiClient:
    """Read-only pass-through to PokeAPI. No caching, no retries."""

    def __init__(self, http_client: httpx.AsyncClient, base_url: str) -> None:
        self._http = http_client
        self.base_url = base_url.rstrip("/")

    async def _get(self, path: str, params: dict | None = None) -> dict:
        url = f"{self.base_url}/{path}"
        try:
            resp = await self._http.get(url, params=params)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(f"PokeAPI returned {status} for {url}")
            raise PokeApiError(f"PokeAPI returned {status}", status_code=status) from e
        except httpx.HTTPError as e:
            logger.warning(f"PokeAPI request to {url} failed: {e}")
            raise PokeApiError("PokeAPI unreachable") from e

        try:
            return resp.json()
        except ValueError as e:
            logger.warning(f"PokeAPI returned invalid JSON for {url}")
            raise PokeApiError("PokeAPI returned invalid JSON") from e

    async def get_pokemon(self, id_or_name: str | int) -> dict:
        return await self._get(f"pokemon/{quote(str(id_or_name), safe='')}")

    async def list_pokemon(self, limit: int = 20, offset: int = 0) -> dict:
        return await self._get("pokemon", params={"limit": limit, "offset": offset})

    async def get_species(self, id_or_name: str | int) -> dict:
        return await self._get(f"pokemon-species/{quote(str(id_or_name), safe='')}")

    async def get_evolution_chain(self, chain_id: str | int) -> dict:
        return await self._get(f"evolution-chain/{quote(str(chain_id), safe='')}")

from fastapi import APIRouter, Depends, HTTPException

from pokedex_bff.api.deps import get_pokeapi
from pokedex_bff.services.pokeapi import PokeApiClient, PokeApiError

router = APIRouter()


def _proxy_error(e: PokeApiError) -> HTTPException:
    if e.not_found:
        return HTTPException(status_code=404, detail="Pokemon not found")
    return HTTPException(status_code=500, detail="PokeAPI error")


@router.get("/pokemon/{pokemon_id}")
async def get_pokemon(pokemon_id: str, pokeapi: PokeApiClient = Depends(get_pokeapi)):
    try:
        return await pokeapi.get_pokemon(pokemon_id)
    except PokeApiError as e:
        raise _proxy_error(e)


@router.get("/pokemon")
async def list_pokemon(
    limit: int = 20,
    offset: int = 0,
    name: str | None = None,
    pokeapi: PokeApiClient = Depends(get_pokeapi),
):
    try:
        if name and name.strip():
            # Search is an exact lookup by (lower-cased) name.
            pokemon = await pokeapi.get_pokemon(name.strip().lower())
            return {"results": [pokemon], "count": 1}
        return await pokeapi.list_pokemon(limit=limit, offset=offset)
    except PokeApiError as e:
        raise _proxy_error(e)


@router.get("/pokemon-species/{species_id}")
async def get_species(species_id: str, pokeapi: PokeApiClient = Depends(get_pokeapi)):
    try:
        return await pokeapi.get_species(species_id)
    except PokeApiError as e:
        raise _proxy_error(e)


@router.get("/pokemon-evolution/{chain_id}")
async def get_evolution_chain(chain_id: str, pokeapi: PokeApiClient = Depends(get_pokeapi)):
    try:
        return await pokeapi.get_evolution_chain(chain_id)
    except PokeApiError as e:
        raise _proxy_error(e)

"""
Secondary graph resolution.

A node id in the dependency graph does not map to exactly one artifact
location, so activation tries an ordered list of candidate locations
derived from the id and stops at the first successful GET. When every
candidate fails, the error lists them all.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Protocol, Sequence, Tuple
from urllib.parse import quote

import httpx

from ..config import DOT_ROUTE_PREFIX, TREE_SUFFIX
from ..core.result import Err, Ok, Result

logger = logging.getLogger(__name__)

CandidateGenerator = Callable[[str], str]

# Characters JavaScript's encodeURIComponent leaves untouched
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_node_id(node_id: str) -> str:
    return quote(node_id, safe=_URI_COMPONENT_SAFE)


def _under_dot(suffix: str) -> CandidateGenerator:
    return lambda node_id: f"{DOT_ROUTE_PREFIX}/{encode_node_id(node_id)}{suffix}"


def _at_root(suffix: str) -> CandidateGenerator:
    return lambda node_id: f"/{encode_node_id(node_id)}{suffix}"


def _flattened_tree_dot(node_id: str) -> str:
    # Nested ids are also published with "/" flattened to "__"
    return _under_dot(f"{TREE_SUFFIX}.dot")(node_id).replace("%2F", "__")


CANDIDATE_GENERATORS: Tuple[CandidateGenerator, ...] = (
    _under_dot(f"{TREE_SUFFIX}.dot"),
    _under_dot(".dot"),
    _under_dot(f"{TREE_SUFFIX}.dot.txt"),
    _at_root(f"{TREE_SUFFIX}.dot"),
    _at_root(".dot"),
    # plain basename form, e.g. "main.py.tree.dot"
    _under_dot(f"{TREE_SUFFIX}.dot"),
    _flattened_tree_dot,
)


def iter_candidates(
    node_id: str,
    generators: Sequence[CandidateGenerator] = CANDIDATE_GENERATORS,
) -> Iterator[str]:
    """Lazily yield candidate locations in order, skipping exact repeats."""
    seen = set()
    for generate in generators:
        location = generate(node_id)
        if location in seen:
            continue
        seen.add(location)
        yield location


def candidate_locations(node_id: str) -> List[str]:
    return list(iter_candidates(node_id))


class ArtifactFetcher(Protocol):
    """Retrieves the text at a location, or None when it is not there."""

    async def fetch(self, location: str) -> Optional[str]:
        ...


class HttpArtifactFetcher:
    """
    GETs candidate locations through an httpx client.

    Non-2xx responses and transport errors both count as a miss.
    """

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def fetch(self, location: str) -> Optional[str]:
        try:
            response = await self._client.get(location)
        except httpx.HTTPError as e:
            logger.debug(f"[fetch] request failed for {location}: {e}")
            return None

        if response.is_success:
            return response.text
        logger.debug(f"[fetch] {location} -> {response.status_code}")
        return None


@dataclass(frozen=True)
class ResolvedArtifact:
    node_id: str
    location: str
    text: str


@dataclass(frozen=True)
class ResolutionError:
    """Every candidate location for ``node_id`` failed."""

    node_id: str
    attempted: Tuple[str, ...]

    @property
    def message(self) -> str:
        return f'No DOT file found for "{self.node_id}". Tried: {", ".join(self.attempted)}.'

    def __str__(self) -> str:
        return self.message


class ArtifactResolver:
    def __init__(
        self,
        fetcher: ArtifactFetcher,
        generators: Sequence[CandidateGenerator] = CANDIDATE_GENERATORS,
    ):
        self._fetcher = fetcher
        self._generators = tuple(generators)

    async def resolve(self, node_id: str) -> Result[ResolvedArtifact, ResolutionError]:
        """Try each candidate in order; the first hit wins."""
        tried: List[str] = []
        for location in iter_candidates(node_id, self._generators):
            tried.append(location)
            logger.debug(f"[resolve] trying {location}")
            text = await self._fetcher.fetch(location)
            if text is not None:
                logger.debug(f"[resolve] found {location}")
                return Ok(ResolvedArtifact(node_id=node_id, location=location, text=text))

        return Err(ResolutionError(node_id=node_id, attempted=tuple(tried)))

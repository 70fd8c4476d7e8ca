"""Search API endpoints."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Path, Query

from ..core.dispatch import DESCRIPTIONS, Algorithm
from ..core.text_ops import EncodingError, decode_payload
from ..core.types import InvalidArgument
from ..models.response import SearchResponse, MultiSearchResponse, CompareResponse
from ..models.request import SearchRequest, MultiSearchRequest, CompareRequest
from ..config import get_settings

router = APIRouter(prefix="/api/v1", tags=["search"])
settings = get_settings()

# Import the global search engine instance
from ..engine_instance import search_engine


def _check_limits(text: str, patterns: list) -> None:
    """Reject payloads above the configured size limits."""
    if len(text) > settings.max_text_length:
        raise HTTPException(
            status_code=400,
            detail=f"Text too long. Maximum length is {settings.max_text_length} characters"
        )
    if len(patterns) > settings.max_patterns:
        raise HTTPException(
            status_code=400,
            detail=f"Too many patterns. Maximum is {settings.max_patterns}"
        )
    for pattern in patterns:
        if len(pattern) > settings.max_pattern_length:
            raise HTTPException(
                status_code=400,
                detail=f"Pattern too long. Maximum length is {settings.max_pattern_length} characters"
            )


@router.get(
    "/algorithms",
    summary="List algorithms",
    description="List the available single-pattern search algorithms"
)
async def list_algorithms() -> dict:
    """List algorithm names, descriptions and the configured default."""
    return {
        "default": search_engine.default_algorithm.value,
        "algorithms": {a.value: DESCRIPTIONS[a] for a in Algorithm},
        "multi_pattern": "aho_corasick",
    }


@router.post(
    "/search",
    response_model=SearchResponse,
    summary="Single-pattern search",
    description="Find every occurrence of a pattern in a text with the chosen algorithm"
)
async def search_with_body(request: SearchRequest) -> SearchResponse:
    """
    Find every occurrence of a pattern, overlapping ones included.

    Text and pattern may be sent as plain text, hex or Base64.
    """
    try:
        _check_limits(request.text, [request.pattern])
        text = decode_payload(request.text, request.encoding)
        pattern = decode_payload(request.pattern, request.encoding)

        return search_engine.search(
            text,
            pattern,
            algorithm=request.algorithm,
            include_text=request.include_text,
        )

    except HTTPException:
        raise
    except (InvalidArgument, EncodingError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Search failed: {str(e)}"
        )


@router.get(
    "/search/{algorithm}",
    response_model=SearchResponse,
    summary="Single-pattern search with query parameters",
    description="Find every occurrence of a pattern using the algorithm named in the path"
)
async def search_with_algorithm(
    algorithm: str = Path(..., description="Algorithm name"),
    text: str = Query(..., description="Text to search"),
    pattern: str = Query(..., description="Pattern to find"),
    max_matches: Optional[int] = Query(
        None,
        ge=1,
        description="Maximum number of matches to return"
    )
) -> SearchResponse:
    """Search using query parameters; handy for quick manual checks."""
    try:
        _check_limits(text, [pattern])
        return search_engine.search(
            text,
            pattern,
            algorithm=algorithm,
            max_matches=max_matches,
        )

    except HTTPException:
        raise
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Search failed: {str(e)}"
        )


@router.post(
    "/search/multi",
    response_model=MultiSearchResponse,
    summary="Multi-pattern search",
    description="Find every occurrence of every pattern in one pass using Aho-Corasick"
)
async def multi_search(request: MultiSearchRequest) -> MultiSearchResponse:
    """
    Scan the text once for a whole pattern set.

    Pattern ids follow the order of the ``patterns`` list. Automata are
    cached, so repeated requests with the same set skip the build.
    """
    try:
        _check_limits(request.text, request.patterns)
        text = decode_payload(request.text, request.encoding)
        patterns = [decode_payload(p, request.encoding) for p in request.patterns]

        return search_engine.search_many(
            text,
            patterns,
            include_text=request.include_text,
        )

    except HTTPException:
        raise
    except (InvalidArgument, EncodingError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Multi-pattern search failed: {str(e)}"
        )


@router.post(
    "/search/compare",
    response_model=CompareResponse,
    summary="Compare algorithms",
    description="Run every single-pattern algorithm on the same input and report consensus"
)
async def compare_algorithms(request: CompareRequest) -> CompareResponse:
    """Run all algorithms and report per-algorithm counts and timings."""
    try:
        _check_limits(request.text, [request.pattern])
        text = decode_payload(request.text, request.encoding)
        pattern = decode_payload(request.pattern, request.encoding)

        return search_engine.compare(text, pattern)

    except HTTPException:
        raise
    except (InvalidArgument, EncodingError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Comparison failed: {str(e)}"
        )

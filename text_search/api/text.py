"""Regex and string transform API endpoints."""

import time
from typing import List

from fastapi import APIRouter, HTTPException

from ..core.text_ops import (
    EncodingError,
    TextTransformer,
    count_pattern,
    decode_base64,
    decode_hex,
    encode_base64,
    encode_hex,
    find_pattern,
    replace_pattern,
)
from ..core.types import InvalidArgument
from ..models.response import RegexResponse, TransformResponse
from ..models.request import RegexRequest, ReplaceRequest, TransformRequest

router = APIRouter(prefix="/api/v1", tags=["text"])

transformer = TextTransformer()

# Operations that do not map onto a single-argument transform.
_SPECIAL_OPERATIONS = {
    "is_palindrome": transformer.is_palindrome,
    "is_empty_or_whitespace": transformer.is_empty_or_whitespace,
    "extract_numbers": transformer.extract_numbers,
    "encode_base64": encode_base64,
    "decode_base64": decode_base64,
    "encode_hex": encode_hex,
    "decode_hex": decode_hex,
}


@router.post(
    "/regex/find",
    response_model=RegexResponse,
    summary="Regex capture",
    description="Return the first capture group of the first regex match"
)
async def regex_find(request: RegexRequest) -> RegexResponse:
    """Return group 1 of the first match, or null when there is none."""
    start_time = time.time()
    result = find_pattern(request.text, request.pattern)
    return RegexResponse(
        operation="find",
        pattern=request.pattern,
        result=result,
        execution_time_ms=(time.time() - start_time) * 1000
    )


@router.post(
    "/regex/replace",
    response_model=RegexResponse,
    summary="Regex replace",
    description="Replace every regex match with a replacement string"
)
async def regex_replace(request: ReplaceRequest) -> RegexResponse:
    """Replace all matches of the expression."""
    start_time = time.time()
    try:
        result = replace_pattern(request.text, request.pattern, request.replacement)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RegexResponse(
        operation="replace",
        pattern=request.pattern,
        result=result,
        execution_time_ms=(time.time() - start_time) * 1000
    )


@router.post(
    "/regex/count",
    response_model=RegexResponse,
    summary="Regex count",
    description="Count case-insensitive regex matches"
)
async def regex_count(request: RegexRequest) -> RegexResponse:
    """Count matches of the expression, ignoring case."""
    start_time = time.time()
    try:
        result = count_pattern(request.text, request.pattern)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RegexResponse(
        operation="count",
        pattern=request.pattern,
        result=result,
        execution_time_ms=(time.time() - start_time) * 1000
    )


@router.post(
    "/transform",
    response_model=TransformResponse,
    summary="Transform text",
    description="Apply a basic string transform or encoding"
)
async def transform_text(request: TransformRequest) -> TransformResponse:
    """
    Apply a named transform.

    ``split_text`` needs ``delimiter``; ``join_text`` needs ``parts`` and
    ``delimiter`` (``text`` is ignored).
    """
    operation = request.operation
    try:
        if operation == "split_text":
            if request.delimiter is None:
                raise InvalidArgument("split_text requires a delimiter")
            result = transformer.split_text(request.text, request.delimiter)
        elif operation == "join_text":
            if request.parts is None:
                raise InvalidArgument("join_text requires parts")
            result = transformer.join_text(request.parts, request.delimiter or "")
        elif operation in _SPECIAL_OPERATIONS:
            result = _SPECIAL_OPERATIONS[operation](request.text)
        else:
            result = transformer.apply(operation, request.text)

    except (InvalidArgument, EncodingError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return TransformResponse(operation=operation, result=result)


@router.get(
    "/transforms",
    response_model=List[str],
    summary="List transforms",
    description="List the names accepted by the transform endpoint"
)
async def list_transforms() -> List[str]:
    """List transform names."""
    names = list(TextTransformer.OPERATIONS) + list(_SPECIAL_OPERATIONS) + ["split_text", "join_text"]
    return sorted(names)

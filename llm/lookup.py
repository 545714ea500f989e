"""
Chemical lookup by CAS number using LLM structured output.
Validates the model answer and derives the storage category.
"""
import asyncio
from functools import partial
from typing import Any, Mapping, Sequence

from pydantic import ValidationError

from core.classifier import classify_storage_category, get_category_label
from core.exceptions import ChemicalNotFoundError, ConfigurationError, ResponseValidationError
from core.logger import setup_logger
from core.rules import CATEGORY_LABELS, H_TO_CATEGORY_RULES
from core.schema import ChemicalInfo, ChemicalLookupResponse, HazardRule, StorageCategory
from llm.client import create_response_schema
from llm.prompts import build_lookup_prompt

logger = setup_logger(__name__)


def parse_lookup_response(llm_response: Any, cas: str) -> ChemicalLookupResponse:
    """
    Validate the raw model answer into a ChemicalLookupResponse.

    Args:
        llm_response: Decoded JSON returned by the client
        cas: CAS number the lookup was made for

    Returns:
        Validated lookup response

    Raises:
        ChemicalNotFoundError: If the model reported the CAS number as invalid
        ResponseValidationError: If the answer does not match the expected shape
    """
    if isinstance(llm_response, dict) and llm_response.get("error"):
        logger.warning(f"Model rejected CAS {cas}: {llm_response['error']}")
        raise ChemicalNotFoundError(
            f"No chemical found for CAS {cas}",
            details={"cas": cas, "reason": llm_response["error"]}
        )

    try:
        return ChemicalLookupResponse.model_validate(llm_response)
    except ValidationError as e:
        logger.error(f"LLM response validation failed for CAS {cas}: {e}")
        raise ResponseValidationError(
            f"Model response for CAS {cas} does not match the expected schema",
            details={"cas": cas, "errors": e.errors(include_url=False, include_context=False)}
        ) from e


def build_chemical_info(
    cas: str,
    data: ChemicalLookupResponse,
    rules: Sequence[HazardRule],
    labels: Mapping[StorageCategory, str],
) -> ChemicalInfo:
    """Classify validated lookup data and assemble the result record."""
    category = classify_storage_category(data.h_statements, data.is_flammable, rules)

    label = get_category_label(category, labels)
    if not label:
        raise ConfigurationError(
            f"No label configured for storage category {category.value}",
            details={"category": category.value}
        )

    return ChemicalInfo(
        cas=cas,
        name=data.name,
        h_statements=list(data.h_statements),
        is_flammable=data.is_flammable,
        category=category,
        category_label=label,
    )


async def fetch_chemical_info(
    cas: str,
    client,
    rules: Sequence[HazardRule] = H_TO_CATEGORY_RULES,
    labels: Mapping[StorageCategory, str] = CATEGORY_LABELS,
) -> ChemicalInfo:
    """
    Look up a chemical by CAS number and classify its storage category.

    Exactly one request is sent per call. Errors from the client and from
    validation propagate to the caller unchanged.

    Args:
        cas: CAS registry number (not validated)
        client: Object exposing call_with_structured_output (see GeminiClientWrapper)
        rules: Ordered H-statement rule table
        labels: Category -> display label table

    Returns:
        ChemicalInfo for the CAS number
    """
    logger.info(f"Looking up CAS {cas}")

    prompt = build_lookup_prompt(cas)
    response_schema = create_response_schema()

    # Client is synchronous, run it in the default thread pool
    loop = asyncio.get_running_loop()
    llm_response = await loop.run_in_executor(
        None,
        partial(
            client.call_with_structured_output,
            prompt=prompt,
            response_schema=response_schema,
        )
    )

    data = parse_lookup_response(llm_response, cas)
    info = build_chemical_info(cas, data, rules, labels)

    logger.info(f"CAS {cas} ({info.name}) classified as {info.category.value}")
    return info

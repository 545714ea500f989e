"""
Unit tests for CAS lookup and classification.
"""
import asyncio

import pytest

from core.exceptions import (
    ChemicalNotFoundError,
    ConfigurationError,
    LLMError,
    ResponseParseError,
    ResponseValidationError,
)
from core.rules import CATEGORY_LABELS
from core.schema import ChemicalInfo, HazardRule, StorageCategory
from llm.client import create_response_schema
from llm.lookup import fetch_chemical_info, parse_lookup_response
from llm.prompts import build_lookup_prompt

FLAMMABLE_LIQUID_RULE = HazardRule(h_codes={"H225"}, flammable=True, category=StorageCategory.CAT_3)


def test_lookup_end_to_end(mock_client):
    info = asyncio.run(fetch_chemical_info("67-64-1", mock_client, rules=[FLAMMABLE_LIQUID_RULE]))

    assert isinstance(info, ChemicalInfo)
    assert info.cas == "67-64-1"
    assert info.name == "丙酮"
    assert info.h_statements == ["H225", "H319", "H336"]
    assert info.is_flammable is True
    assert info.category == StorageCategory.CAT_3
    assert info.category_label == CATEGORY_LABELS[StorageCategory.CAT_3]


def test_lookup_sends_prompt_and_schema(mock_client):
    asyncio.run(fetch_chemical_info("67-64-1", mock_client))

    mock_client.call_with_structured_output.assert_called_once_with(
        prompt=build_lookup_prompt("67-64-1"),
        response_schema=create_response_schema(),
    )


def test_lookup_keeps_raw_h_statements(mock_client):
    mock_client.call_with_structured_output.return_value = {
        "name": "乙醇",
        "hStatements": [" h225", "H225", "H319"],
        "isFlammable": True,
    }
    info = asyncio.run(fetch_chemical_info("64-17-5", mock_client, rules=[FLAMMABLE_LIQUID_RULE]))

    assert info.h_statements == [" h225", "H225", "H319"]
    assert info.category == StorageCategory.CAT_3


def test_lookup_passes_cas_through_unvalidated(mock_client):
    info = asyncio.run(fetch_chemical_info("not a cas", mock_client))
    assert info.cas == "not a cas"
    assert "not a cas" in mock_client.call_with_structured_output.call_args.kwargs["prompt"]


def test_lookup_unknown_category(mock_client):
    mock_client.call_with_structured_output.return_value = {
        "name": "氯化钠",
        "hStatements": [],
        "isFlammable": False,
    }
    info = asyncio.run(fetch_chemical_info("7647-14-5", mock_client))

    assert info.category == StorageCategory.UNKNOWN
    assert info.category_label == CATEGORY_LABELS[StorageCategory.UNKNOWN]


def test_lookup_uses_injected_labels(mock_client):
    labels = {category: category.value.lower() for category in StorageCategory}
    info = asyncio.run(
        fetch_chemical_info("67-64-1", mock_client, rules=[FLAMMABLE_LIQUID_RULE], labels=labels)
    )
    assert info.category_label == "cat_3"


def test_lookup_missing_label_is_configuration_error(mock_client):
    with pytest.raises(ConfigurationError):
        asyncio.run(fetch_chemical_info("67-64-1", mock_client, rules=[FLAMMABLE_LIQUID_RULE], labels={}))


@pytest.mark.parametrize(
    "error",
    [
        LLMError("Gemini returned HTTP error: 401"),
        ResponseParseError("Model returned invalid JSON"),
    ],
)
def test_lookup_propagates_client_errors(mock_client, error):
    mock_client.call_with_structured_output.side_effect = error

    with pytest.raises(type(error)) as exc_info:
        asyncio.run(fetch_chemical_info("67-64-1", mock_client))

    assert exc_info.value is error
    assert mock_client.call_with_structured_output.call_count == 1


def test_lookup_schema_mismatch(mock_client):
    mock_client.call_with_structured_output.return_value = {
        "name": "丙酮",
        "hStatements": ["H225"],
        "isFlammable": "yes",
    }
    with pytest.raises(ResponseValidationError) as exc_info:
        asyncio.run(fetch_chemical_info("67-64-1", mock_client))

    assert exc_info.value.details["cas"] == "67-64-1"
    assert exc_info.value.details["errors"]


def test_lookup_model_reports_invalid_cas(mock_client):
    mock_client.call_with_structured_output.return_value = {
        "name": "",
        "hStatements": [],
        "isFlammable": False,
        "error": "Invalid CAS number checksum",
    }
    with pytest.raises(ChemicalNotFoundError) as exc_info:
        asyncio.run(fetch_chemical_info("00-00-0", mock_client))

    assert exc_info.value.details["reason"] == "Invalid CAS number checksum"


def test_parse_lookup_response_null_error_is_ignored(acetone_response):
    data = parse_lookup_response({**acetone_response, "error": None}, "67-64-1")
    assert data.name == "丙酮"


def test_parse_lookup_response_rejects_non_object():
    with pytest.raises(ResponseValidationError):
        parse_lookup_response(["H225"], "67-64-1")


def test_lookup_with_empty_name(mock_client):
    mock_client.call_with_structured_output.return_value = {
        "name": "",
        "hStatements": ["H225"],
        "isFlammable": True,
    }
    info = asyncio.run(fetch_chemical_info("67-64-1", mock_client, rules=[FLAMMABLE_LIQUID_RULE]))

    assert info.name == ""
    assert info.category == StorageCategory.CAT_3
    assert info.category_label == CATEGORY_LABELS[StorageCategory.CAT_3]

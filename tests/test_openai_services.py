from __future__ import annotations

from types import SimpleNamespace

import pytest

from conftest import FakeOpenAI, critique_response
from models.design_models import Critique, GeneratedVariant, GenerationRequest
from services.generation.errors import AnalysisFailure, NoContentError
from services.openai.critique_schema import FUNCTION_DEFINITION, FUNCTION_NAME
from services.openai.design_critic import DesignCritic
from services.openai.image_editor import ImageEditor


@pytest.fixture
def request_payload() -> GenerationRequest:
    return GenerationRequest(image_data="QUJD", mime_type="image/jpeg", prompt="Make it futuristic")


class TestImageEditor:
    def test_requires_client(self) -> None:
        with pytest.raises(ValueError):
            ImageEditor(None)  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_sends_image_then_instruction(self, fake_openai: FakeOpenAI, request_payload) -> None:
        variant = await ImageEditor(fake_openai).edit(request_payload)

        assert variant == GeneratedVariant(data="variant-0")
        kwargs = fake_openai.edit_calls[0]
        content = kwargs["input"][0]["content"]
        assert content[0] == {"type": "input_image", "image_url": "data:image/jpeg;base64,QUJD"}
        assert content[1] == {"type": "input_text", "text": "Make it futuristic"}
        assert kwargs["tool_choice"] == {"type": "image_generation"}

    @pytest.mark.asyncio
    async def test_missing_image_raises_no_content(self, request_payload) -> None:
        client = FakeOpenAI(edit_outcome=lambda n: None)
        with pytest.raises(NoContentError):
            await ImageEditor(client).edit(request_payload)

    @pytest.mark.asyncio
    async def test_first_image_part_wins(self, request_payload) -> None:
        client = FakeOpenAI()
        response = SimpleNamespace(
            output=[
                SimpleNamespace(type="reasoning"),
                SimpleNamespace(type="image_generation_call", result="first"),
                SimpleNamespace(type="image_generation_call", result="second"),
            ],
            usage=None,
        )
        client.responses.create.side_effect = None
        client.responses.create.return_value = response

        variant = await ImageEditor(client).edit(request_payload)
        assert variant.data == "first"

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, request_payload) -> None:
        client = FakeOpenAI()
        client.responses.create.side_effect = ConnectionError("network down")
        with pytest.raises(ConnectionError):
            await ImageEditor(client).edit(request_payload)


class TestDesignCritic:
    def test_schema_requires_both_lists(self) -> None:
        params = FUNCTION_DEFINITION["parameters"]
        assert params["required"] == ["pros", "cons"]
        assert params["properties"]["pros"]["items"] == {"type": "string"}
        assert FUNCTION_DEFINITION["strict"] is True

    @pytest.mark.asyncio
    async def test_returns_validated_critique(self, fake_openai: FakeOpenAI) -> None:
        critique = await DesignCritic(fake_openai).critique(GeneratedVariant(data="v1"), "Add chrome trim")

        assert critique == Critique(pros=["v1 looks sleek"], cons=["v1 is costly"])
        kwargs = fake_openai.critique_calls[0]
        assert kwargs["tool_choice"] == {"type": "function", "name": FUNCTION_NAME}
        user_content = kwargs["input"][1]["content"]
        assert user_content[0]["image_url"] == "data:image/png;base64,v1"
        assert "Add chrome trim" in user_content[1]["text"]

    @pytest.mark.asyncio
    async def test_malformed_json_raises_analysis_failure(self) -> None:
        client = FakeOpenAI(critique_outcome=lambda data: critique_response("{not json"))
        with pytest.raises(AnalysisFailure):
            await DesignCritic(client).critique(GeneratedVariant(data="v1"), "prompt")

    @pytest.mark.asyncio
    async def test_schema_violation_raises_analysis_failure(self) -> None:
        client = FakeOpenAI(critique_outcome=lambda data: {"pros": "one string", "cons": []})
        with pytest.raises(AnalysisFailure):
            await DesignCritic(client).critique(GeneratedVariant(data="v1"), "prompt")

    @pytest.mark.asyncio
    async def test_missing_field_raises_analysis_failure(self) -> None:
        client = FakeOpenAI(critique_outcome=lambda data: {"pros": ["ok"]})
        with pytest.raises(AnalysisFailure):
            await DesignCritic(client).critique(GeneratedVariant(data="v1"), "prompt")

    @pytest.mark.asyncio
    async def test_no_function_call_raises_analysis_failure(self) -> None:
        client = FakeOpenAI(critique_outcome=lambda data: SimpleNamespace(output=[], usage=None))
        with pytest.raises(AnalysisFailure):
            await DesignCritic(client).critique(GeneratedVariant(data="v1"), "prompt")

import asyncio
import base64
import json

import httpx
import pytest

from config.settings import ProviderSettings
from core.errors import GenerationError
from core.generation.gateway import ACCESS_HINT, GenerationGateway, aspect_to_size
from core.generation.session import RAW_FUSED_PROMPT, RAW_STYLE_ID, GenerationSession
from core.models.domain import StyleProfile
from core.providers.huggingface import HuggingFaceClient

PROFILE = StyleProfile(
    id="style-1",
    name="Noir",
    description="Film noir",
    visual_technique="High contrast",
    palette=("#000000",),
    moods=("moody",),
    reference_images=("data:image/png;base64,AAAA",),
)


@pytest.mark.parametrize(
    "aspect, resolution, size",
    [
        ("1:1", "1K", (1024, 1024)),
        ("16:9", "1K", (1024, 576)),
        ("4:3", "2K", (1536, 1152)),
        ("3:4", "1K", (768, 1024)),
        ("16:9", "4K", (1536, 864)),
    ],
)
def test_aspect_to_size(aspect, resolution, size):
    assert aspect_to_size(aspect, resolution) == size


def test_unknown_size_inputs_raise():
    with pytest.raises(ValueError):
        aspect_to_size("2:1", "1K")
    with pytest.raises(ValueError):
        aspect_to_size("1:1", "8K")


def run_gateway(handler, **kwargs):
    async def scenario():
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = HuggingFaceClient(ProviderSettings(base_url="https://hf.test", token="tok"), http)
        try:
            return await GenerationGateway(client, "org/flux").generate_from_graph("p", "fused p", **kwargs)
        finally:
            await http.aclose()

    return asyncio.run(scenario())


def test_gateway_returns_data_url_and_sends_size():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, content=b"\x89PNGdata", headers={"content-type": "image/png"})

    url = run_gateway(handler, aspect_ratio="16:9", resolution="1K")

    assert url == "data:image/png;base64," + base64.b64encode(b"\x89PNGdata").decode("ascii")
    request = seen[0]
    assert request.url == "https://hf.test/models/org/flux"
    assert request.headers["accept"] == "image/png"
    assert request.headers["authorization"] == "Bearer tok"
    payload = json.loads(request.content)
    assert payload["inputs"] == "fused p"
    assert payload["parameters"] == {"width": 1024, "height": 576}


def test_gateway_adds_access_hint_for_missing_model():
    with pytest.raises(GenerationError) as excinfo:
        run_gateway(lambda request: httpx.Response(404, text="Model not found"))

    assert excinfo.value.status_code == 404
    assert "HF Inference error (404): Model not found" in str(excinfo.value)
    assert str(excinfo.value).endswith(ACCESS_HINT)


def test_gateway_server_error_has_no_hint():
    with pytest.raises(GenerationError) as excinfo:
        run_gateway(lambda request: httpx.Response(500, text="boom"))

    assert str(excinfo.value) == "HF Inference error (500): boom"


def test_gateway_rejects_empty_image():
    with pytest.raises(GenerationError):
        run_gateway(lambda request: httpx.Response(200, content=b""))


class FakeGateway:
    def __init__(self):
        self.calls = []

    async def generate_from_graph(self, prompt, fused_prompt, reference_images=(), input_images=(),
                                  aspect_ratio="1:1", resolution="1K"):
        self.calls.append(
            {
                "prompt": prompt,
                "fused": fused_prompt,
                "references": list(reference_images),
                "inputs": list(input_images),
                "aspect": aspect_ratio,
                "resolution": resolution,
            }
        )
        return f"data:image/png;base64,IMG{len(self.calls)}"


def test_session_generates_styled_image():
    gateway = FakeGateway()
    session = GenerationSession(gateway, PROFILE, aspect_ratio="4:3", resolution="2K")

    outcome = asyncio.run(session.generate("a street", intensity=0.9, negative_prompt="cars"))

    image = outcome.image
    assert outcome.comparison is None
    assert image.prompt == "a street"
    assert image.fused_prompt.startswith("a street (Exclude: cars)\n\nStyle guidance (strict, 90%)")
    assert image.style_id == "style-1"
    assert (image.aspect_ratio, image.resolution) == ("4:3", "2K")
    assert gateway.calls[0]["references"] == list(PROFILE.reference_images)
    assert session.history == [image]


def test_session_comparison_renders_raw_prompt():
    gateway = FakeGateway()
    session = GenerationSession(gateway, PROFILE)

    outcome = asyncio.run(session.generate("a cat", compare=True))

    assert len(gateway.calls) == 2
    assert gateway.calls[1]["fused"] == "a cat"
    assert gateway.calls[1]["references"] == []
    assert outcome.comparison.style_id == RAW_STYLE_ID
    assert outcome.comparison.fused_prompt == RAW_FUSED_PROMPT
    assert outcome.comparison.url == "data:image/png;base64,IMG2"


def test_session_rejects_blank_prompt():
    session = GenerationSession(FakeGateway(), PROFILE)

    with pytest.raises(ValueError):
        asyncio.run(session.generate("   "))


def test_edit_results_replace_attachments():
    gateway = FakeGateway()
    session = GenerationSession(gateway, PROFILE)
    session.attach(["data:image/png;base64,SRC"])

    first = asyncio.run(session.generate("recolor", mode="EDIT", creativity=0.2))
    asyncio.run(session.generate("again", mode="EDIT"))

    assert gateway.calls[0]["inputs"] == ["data:image/png;base64,SRC"]
    assert "[Instruction: Keep strict adherence to structure.]" in gateway.calls[0]["fused"]
    assert gateway.calls[1]["inputs"] == [first.image.url]

    session.clear_attachments()
    asyncio.run(session.generate("fresh"))
    assert gateway.calls[2]["inputs"] == []
    assert session.attachments == []


def test_variations_reuse_fused_prompt():
    gateway = FakeGateway()
    session = GenerationSession(gateway, PROFILE)
    original = asyncio.run(session.generate("a tree")).image

    variants = asyncio.run(session.variations(original))

    assert len(variants) == 3
    assert len({variant.id for variant in variants}) == 3
    assert all(variant.fused_prompt == original.fused_prompt for variant in variants)
    assert all(call["prompt"] == "a tree (variation)" for call in gateway.calls[1:])

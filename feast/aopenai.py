import os

import httpx
import openai
from openai.types.chat import ChatCompletionMessageParam

from feast.errors import EnrichmentError


TIMEOUT = 60 * 2
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_IMAGE_MODEL = "dall-e-3"


def openai_client_factory(
    token: str | None = None,
    *,
    timeout: float = TIMEOUT,
) -> openai.AsyncClient:
    token = os.environ.get("OPENAI_API_KEY") if token is None else token
    return openai.AsyncClient(
        api_key=token,
        http_client=httpx.AsyncClient(timeout=timeout),
    )


async def quick_chat(
    msg: str,
    *,
    openai_client: openai.AsyncClient,
    model: str | None = None,
    system: str | None = None,
    json: bool = False,
) -> str:
    model = DEFAULT_MODEL if model is None else model
    messages: list[ChatCompletionMessageParam] = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": msg})

    if json:
        resp = await openai_client.chat.completions.create(
            model=model,
            messages=messages,
            response_format={"type": "json_object"},
        )
    else:
        resp = await openai_client.chat.completions.create(
            model=model,
            messages=messages,
        )
    ans = resp.choices[0].message.content or ""
    return ans.strip()


async def generate_image(
    prompt: str,
    *,
    openai_client: openai.AsyncClient,
    model: str | None = None,
    size: str = "1024x1024",
) -> str:
    """Generates one image and returns it as a ``data:image/png;base64`` URI."""
    model = DEFAULT_IMAGE_MODEL if model is None else model
    resp = await openai_client.images.generate(
        model=model,
        prompt=prompt,
        size=size,  # pyright: ignore[reportArgumentType]
        response_format="b64_json",
        n=1,
    )
    data = resp.data[0].b64_json if resp.data else None
    if not data:
        raise EnrichmentError("Image generation failed or returned no image data.")
    return f"data:image/png;base64,{data}"

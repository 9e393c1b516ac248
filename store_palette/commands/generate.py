"""Generate a storefront from a free-text prompt with an LLM, then derive its palette.

Sends the prompt to any OpenAI-compatible chat completion endpoint with a
system prompt asking for a storefront JSON document (name, tagline, theme
colours, products, marketing copy). The reply is parsed, stamped with id,
createdAt and originalPrompt, saved to the record store (unless --no-save)
and its theme run through the palette policy.

## Provider configuration

    {PROVIDER}_API_KEY  : required (or --api-key)
    {PROVIDER}_API_URL  : optional for openai, groq, mistral
    {PROVIDER}_MODEL    : optional, default gpt-4o-mini for openai

The default provider is openai, or STORE_PALETTE_PROVIDER if set.
The record store file is STORE_PALETTE_DB (default .store-palette/stores.json).

The generator is free to return any colours it likes, including malformed
ones; use --fallback to substitute a colour instead of failing.

Example:
    OPENAI_API_KEY=... uv run store-palette generate 'a cosy bookshop for rare maps'
    GROQ_API_KEY=...   uv run store-palette generate 'vegan bakery' --provider groq --json
"""

import json
import sys
from typing import Any

from store_palette.commands.palette import add_palette
from store_palette.core.env import db_path, default_provider, resolve_provider
from store_palette.core.store import StoreRecords, new_id, now_iso
from store_palette.core.types import Command, Report

command = Command(
    name='generate',
    help='Generate a storefront from a prompt with an LLM and derive its palette.',
)

TEMPERATURE = 0.8
MAX_TOKENS = 2000

SYSTEM_PROMPT = """You are an expert e-commerce store designer. Generate a complete online store \
based on the user's concept. Return valid JSON only with this exact structure:

{
  "name": "Store Name",
  "tagline": "Catchy store tagline",
  "theme": {
    "primary": "#hex-color",
    "secondary": "#hex-color",
    "accent": "#hex-color"
  },
  "products": [
    {
      "id": 1,
      "name": "Product Name",
      "description": "Detailed product description",
      "price": 29.99,
      "category": "Category Name"
    }
  ],
  "content": {
    "about": "About page content (2-3 paragraphs)",
    "hero": "Hero section marketing copy",
    "contact": {
      "email": "contact@store.com",
      "phone": "(555) 123-4567",
      "address": "123 Main St, City, State 12345"
    }
  }
}

Generate 12-15 realistic products with market-appropriate pricing. Make the store professional and engaging."""


class GenerationError(RuntimeError):
    """Raised when the LLM call fails or its reply is not a storefront document."""


def _complete(api_key: str, api_url: str, model: str, prompt: str) -> str:
    """Call any OpenAI-compatible endpoint. Returns the reply text."""
    import openai

    client = openai.OpenAI(api_key=api_key, base_url=api_url or None)
    try:
        response = client.chat.completions.create(
            model=model,
            messages=[
                {'role': 'system', 'content': SYSTEM_PROMPT},
                {'role': 'user', 'content': prompt},
            ],
            temperature=TEMPERATURE,
            max_tokens=MAX_TOKENS,
        )
    except openai.OpenAIError as e:
        raise GenerationError(f'chat completion failed: {e}') from e
    if not response.choices:
        return ''
    return response.choices[0].message.content or ''


def _strip_fences(text: str) -> str:
    """Drop a ```json ... ``` wrapper some models add around the document."""
    stripped = text.strip()
    if stripped.startswith('```'):
        stripped = stripped.split('\n', 1)[1] if '\n' in stripped else ''
        if stripped.rstrip().endswith('```'):
            stripped = stripped.rstrip()[:-3]
    return stripped.strip()


def generate_store(prompt: str, api_key: str, api_url: str, model: str) -> dict[str, Any]:
    """Ask the LLM for a storefront document and stamp it with metadata."""
    if not prompt or not prompt.strip():
        raise GenerationError('prompt is required')
    reply = _complete(api_key, api_url, model, prompt)
    if not reply.strip():
        raise GenerationError('empty reply from model')
    try:
        doc = json.loads(_strip_fences(reply))
    except json.JSONDecodeError as e:
        raise GenerationError(f'reply is not valid JSON: {e}') from e
    if not isinstance(doc, dict):
        raise GenerationError('reply is not a JSON object')

    doc['id'] = new_id()
    doc['createdAt'] = now_iso()
    doc['originalPrompt'] = prompt
    return doc


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('prompt', help='Free-text storefront concept')
    parser.add_argument('-p', '--provider', default=None, help='LLM provider name (default: openai)')
    parser.add_argument('-k', '--api-key', help='LLM API key (overrides env var)')
    parser.add_argument('--no-save', action='store_true', help='Do not write the storefront to the record store')
    parser.add_argument('--fallback', metavar='HEX', help='Colour to substitute for malformed theme colours')


@command.run
def run(args, report: Report) -> None:
    provider = (getattr(args, 'provider', None) or default_provider()).lower()
    api_key, api_url, model = resolve_provider(provider, getattr(args, 'api_key', None))

    if not api_key:
        print(f'generate: no API key. Set {provider.upper()}_API_KEY or pass --api-key.', file=sys.stderr)
        sys.exit(1)
    if not api_url:
        print(f'generate: no API URL. Set {provider.upper()}_API_URL.', file=sys.stderr)
        sys.exit(1)

    print(f'generate: provider={provider}  model={model}  url={api_url}', file=sys.stderr)

    try:
        doc = generate_store(args.prompt, api_key, api_url, model)
    except GenerationError as e:
        print(f'generate: error: {e}', file=sys.stderr)
        sys.exit(1)

    if not args.no_save:
        path = db_path()
        StoreRecords(path).create(doc)
        report.add('saved', {'path': path})

    add_palette(doc, report, fallback=getattr(args, 'fallback', None))
    report.add('store', {'tagline': doc.get('tagline'), 'products': len(doc.get('products') or [])})

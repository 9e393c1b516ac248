"""Tests for store_palette.commands.generate: LLM storefront generation (no network)."""

import json
from types import SimpleNamespace

import openai
import pytest
from store_palette.commands import generate
from store_palette.commands.generate import SYSTEM_PROMPT, GenerationError, _strip_fences, generate_store

STORE_JSON = json.dumps(
    {
        'name': 'Map Room',
        'tagline': 'Rare maps, well kept',
        'theme': {'primary': '#ffffff', 'secondary': '#114488', 'accent': '#ffee00'},
        'products': [{'id': 1, 'name': 'Atlas', 'description': 'Old', 'price': 29.99, 'category': 'Maps'}],
    }
)


def _fake_complete(reply: str):
    def fake(api_key: str, api_url: str, model: str, prompt: str) -> str:
        return reply

    return fake


class TestStripFences:
    def test_plain(self):
        assert _strip_fences('{"a": 1}') == '{"a": 1}'

    def test_json_fence(self):
        assert _strip_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self):
        assert _strip_fences('```\n{"a": 1}\n```\n') == '{"a": 1}'


class TestGenerateStore:
    def test_stamps_metadata(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(generate, '_complete', _fake_complete(STORE_JSON))
        doc = generate_store('map shop', 'k', 'http://x', 'm')
        assert doc['name'] == 'Map Room'
        assert doc['originalPrompt'] == 'map shop'
        assert doc['id'].isdigit()
        assert doc['createdAt'].endswith('Z')

    def test_fenced_reply(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(generate, '_complete', _fake_complete(f'```json\n{STORE_JSON}\n```'))
        assert generate_store('map shop', 'k', 'http://x', 'm')['tagline'] == 'Rare maps, well kept'

    def test_empty_prompt(self):
        with pytest.raises(GenerationError):
            generate_store('   ', 'k', 'http://x', 'm')

    def test_empty_reply(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(generate, '_complete', _fake_complete(''))
        with pytest.raises(GenerationError):
            generate_store('map shop', 'k', 'http://x', 'm')

    def test_non_json_reply(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(generate, '_complete', _fake_complete('Sure! Here is your store.'))
        with pytest.raises(GenerationError):
            generate_store('map shop', 'k', 'http://x', 'm')

    def test_json_array_reply(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(generate, '_complete', _fake_complete('[1, 2]'))
        with pytest.raises(GenerationError):
            generate_store('map shop', 'k', 'http://x', 'm')


class TestComplete:
    def test_request_shape(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls = {}

        class FakeCompletions:
            def create(self, **kwargs):
                calls['create'] = kwargs
                message = SimpleNamespace(content=STORE_JSON)
                return SimpleNamespace(choices=[SimpleNamespace(message=message)])

        class FakeClient:
            def __init__(self, api_key, base_url):
                calls['client'] = (api_key, base_url)
                self.chat = SimpleNamespace(completions=FakeCompletions())

        monkeypatch.setattr(openai, 'OpenAI', FakeClient)
        reply = generate._complete('key', 'https://api.openai.com/v1', 'gpt-4o-mini', 'map shop')

        assert reply == STORE_JSON
        assert calls['client'] == ('key', 'https://api.openai.com/v1')
        kwargs = calls['create']
        assert kwargs['model'] == 'gpt-4o-mini'
        assert kwargs['temperature'] == 0.8
        assert kwargs['max_tokens'] == 2000
        assert kwargs['messages'][0] == {'role': 'system', 'content': SYSTEM_PROMPT}
        assert kwargs['messages'][1] == {'role': 'user', 'content': 'map shop'}

    def test_no_choices(self, monkeypatch: pytest.MonkeyPatch) -> None:
        class FakeClient:
            def __init__(self, api_key, base_url):
                create = lambda **kwargs: SimpleNamespace(choices=[])  # noqa: E731
                self.chat = SimpleNamespace(completions=SimpleNamespace(create=create))

        monkeypatch.setattr(openai, 'OpenAI', FakeClient)
        assert generate._complete('key', 'http://x', 'm', 'p') == ''

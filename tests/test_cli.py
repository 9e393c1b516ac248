"""End-to-end tests for the store-palette command line."""

import json
from pathlib import Path

import pytest
from store_palette.__main__ import main
from store_palette.commands import generate
from store_palette.core.store import StoreRecords
from store_palette.registry import all_commands

STORE_DOC = {
    'name': 'Map Room',
    'tagline': 'Rare maps, well kept',
    'theme': {'primary': '#FFFFFF', 'secondary': '#114488', 'accent': '#FFFFFF'},
    'products': [{'id': 1, 'name': 'Atlas', 'price': 29.99}],
}


@pytest.fixture(autouse=True)
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every CLI call in an isolated repo with its own record store."""
    (tmp_path / '.git').mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv('STORE_PALETTE_DB', str(tmp_path / 'stores.json'))
    monkeypatch.delenv('STORE_PALETTE_PROVIDER', raising=False)
    for var in ('OPENAI_API_KEY', 'OPENAI_API_URL', 'OPENAI_MODEL'):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


def _json(capsys: pytest.CaptureFixture[str]) -> dict:
    return json.loads(capsys.readouterr().out)


class TestRegistry:
    def test_discovers_every_command(self):
        assert set(all_commands()) == {'audit', 'contrast', 'generate', 'palette', 'stores', 'swatch', 'text'}


class TestPaletteCommand:
    def test_scenarios(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(['palette', '#FFFFFF', '#114488', '#FFFFFF', '--json'])
        out = _json(capsys)
        colors = out['palette']['colors']
        assert colors['primary'] == '#999999'
        assert colors['accent'] == '#cccccc'
        assert colors['secondary'] == '#114488'
        assert out['palette']['adjusted'] == ['primary', 'accent']
        assert out['palette']['input']['primary'] == '#ffffff'
        assert set(out['palette']['text']) == set(colors)
        assert out['summary']['total'] == len(out['checks'])

    def test_text_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(['palette', '#000000', '#114488', '#3366cc'])
        out = capsys.readouterr().out
        assert '── palette' in out
        assert '#d9d9d9' in out
        assert 'PASS' in out

    def test_malformed_colour_fails_loudly(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(['palette', 'red', '#114488', '#3366cc', '--json'])
        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert 'store-palette: error:' in captured.err
        assert captured.out == ''

    def test_wrong_number_of_colours(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(['palette', '#114488'])
        assert exc_info.value.code == 2

    def test_fallback(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(['palette', 'red', '#114488', '#3366cc', '--fallback', '#808080', '--json'])
        captured = capsys.readouterr()
        out = json.loads(captured.out)
        assert out['palette']['input']['primary'] == '#808080'
        assert out['palette']['colors']['primary'] == '#a6a6a6'
        assert 'palette: substituting #808080' in captured.err

    def test_strict_exits_on_failed_check(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(['palette', '#808080', '#114488', '#3366cc', '--strict'])
        assert exc_info.value.code == 1
        assert '✗' in capsys.readouterr().out

    def test_from_file(self, workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = workspace / 'store.json'
        path.write_text(json.dumps(STORE_DOC))
        main(['palette', '--file', str(path), '--json'])
        out = _json(capsys)
        assert out['store']['name'] == 'Map Room'
        assert out['palette']['colors']['primary'] == '#999999'

    def test_missing_file(self, workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(['palette', '--file', str(workspace / 'nope.json')])
        assert exc_info.value.code == 1
        assert 'file not found' in capsys.readouterr().err

    def test_from_store(self, workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
        StoreRecords(workspace / 'stores.json').create(dict(STORE_DOC, id='42'))
        main(['palette', '--store', '42', '--json'])
        assert _json(capsys)['store']['id'] == '42'

    def test_unknown_store(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(['palette', '--store', 'missing'])
        assert exc_info.value.code == 1


class TestContrastCommand:
    def test_black_white(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(['contrast', '000000', 'ffffff', '--json'])
        out = _json(capsys)
        assert out['contrast']['ratio'] == 21.0
        assert out['summary'] == {'total': 2, 'pass': 2, 'fail': 0}

    def test_low_contrast(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(['contrast', '#ffffff', '#ffee00', '--json'])
        assert _json(capsys)['summary']['fail'] == 2


class TestTextCommand:
    def test_white_background(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(['text', '#FFFFFF', '--json'])
        out = _json(capsys)
        assert out['text']['text'] == '#000000'
        assert out['text']['light'] is True

    def test_black_background(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(['text', '#000000', '--json'])
        assert _json(capsys)['text']['text'] == '#ffffff'


class TestAuditCommand:
    def test_matrix(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(['audit', '#3366cc', '#114488', '#ffee00', '--json'])
        out = _json(capsys)
        labels = out['matrix']['labels']
        ratios = out['matrix']['ratios']
        assert labels == ['primary', 'secondary', 'accent', 'light', 'dark', 'muted', 'black', 'white']
        assert len(ratios) == 8
        assert all(len(row) == 8 for row in ratios)
        assert ratios[6][7] == 21.0
        assert ratios[0][0] == 1.0

    def test_text_matrix(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(['audit', '#3366cc', '#114488', '#ffee00'])
        out = capsys.readouterr().out
        assert '── matrix' in out
        assert '21.00' in out


class TestSwatchCommand:
    def test_writes_png(self, workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
        target = workspace / 'out' / 'palette.png'
        main(['swatch', str(target), '#3366cc', '#114488', '#ffee00', '--json'])
        out = _json(capsys)
        assert target.is_file()
        assert out['swatch']['width'] == 720
        assert out['swatch']['height'] == 120

    @pytest.mark.parametrize('band', ['0', '-10'])
    def test_band_must_be_positive(self, workspace: Path, band: str, capsys: pytest.CaptureFixture[str]) -> None:
        target = workspace / 'palette.png'
        with pytest.raises(SystemExit) as exc_info:
            main(['swatch', str(target), '#ffffff', '#114488', '#ffffff', '--band', band])
        assert exc_info.value.code == 2
        assert 'band must be at least 1 pixel' in capsys.readouterr().err
        assert not target.exists()


class TestStoresCommand:
    def test_list_empty(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(['stores', 'list', '--json'])
        assert _json(capsys)['stores']['records'] == []

    def test_list_show_delete_clear(self, workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
        records = StoreRecords(workspace / 'stores.json')
        records.create(dict(STORE_DOC, id='1'))
        records.create(dict(STORE_DOC, id='2', name='Second'))

        main(['stores', 'list', '--json'])
        assert [r['id'] for r in _json(capsys)['stores']['records']] == ['2', '1']

        main(['stores', 'show', '1', '--json'])
        out = _json(capsys)
        assert out['store']['name'] == 'Map Room'
        assert out['palette']['colors']['accent'] == '#cccccc'

        main(['stores', 'delete', '1', '--json'])
        assert _json(capsys)['stores']['removed'] is True
        assert records.get('1') is None

        main(['stores', 'clear', '--json'])
        assert _json(capsys)['stores']['cleared'] is True
        assert records.list() == []

    def test_show_needs_id(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(['stores', 'show'])
        assert exc_info.value.code == 2

    def test_show_fallback_warning(self, workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
        StoreRecords(workspace / 'stores.json').create({'id': '1', 'name': 'Bare', 'theme': {'primary': 'navy'}})
        main(['stores', 'show', '1', '--fallback', '#114488', '--json'])
        captured = capsys.readouterr()
        assert json.loads(captured.out)['palette']['input']['primary'] == '#114488'
        assert 'stores: substituting #114488 for theme.primary' in captured.err
        assert 'palette:' not in captured.err

    def test_corrupt_store_file(self, workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (workspace / 'stores.json').write_text('not json')
        with pytest.raises(SystemExit) as exc_info:
            main(['stores', 'list'])
        assert exc_info.value.code == 1
        assert 'store-palette: error:' in capsys.readouterr().err

    def test_list_record_without_metadata(self, workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (workspace / 'stores.json').write_text(json.dumps([{'id': '1', 'name': 'A', 'theme': {}}, {'name': 'B'}]))
        main(['stores', 'list'])
        lines = capsys.readouterr().out.splitlines()
        rows = [line.split() for line in lines if not line.startswith(('──', '  path:'))]
        assert rows == [['1', 'A'], ['?', 'B']]

    def test_non_object_record(self, workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (workspace / 'stores.json').write_text('[1]')
        with pytest.raises(SystemExit) as exc_info:
            main(['stores', 'list'])
        assert exc_info.value.code == 1
        assert 'not a JSON object' in capsys.readouterr().err


class TestGenerateCommand:
    def test_saves_and_derives(
        self, workspace: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv('OPENAI_API_KEY', 'sk-test')
        monkeypatch.setattr(generate, '_complete', lambda *args: json.dumps(STORE_DOC))
        main(['generate', 'a shop for rare maps', '--json'])
        captured = capsys.readouterr()
        out = json.loads(captured.out)
        assert out['palette']['colors']['primary'] == '#999999'
        assert out['store']['products'] == 1
        assert 'provider=openai' in captured.err

        stored = StoreRecords(workspace / 'stores.json').list()
        assert len(stored) == 1
        assert stored[0]['originalPrompt'] == 'a shop for rare maps'

    def test_no_save(
        self, workspace: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr(generate, '_complete', lambda *args: json.dumps(STORE_DOC))
        main(['generate', 'maps', '--api-key', 'sk-test', '--no-save', '--json'])
        assert 'saved' not in _json(capsys)
        assert StoreRecords(workspace / 'stores.json').list() == []

    def test_missing_key(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(['generate', 'maps'])
        assert exc_info.value.code == 1
        assert 'OPENAI_API_KEY' in capsys.readouterr().err

    def test_bad_reply(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        monkeypatch.setenv('OPENAI_API_KEY', 'sk-test')
        monkeypatch.setattr(generate, '_complete', lambda *args: 'not json')
        with pytest.raises(SystemExit) as exc_info:
            main(['generate', 'maps'])
        assert exc_info.value.code == 1
        assert 'generate: error:' in capsys.readouterr().err


class TestHelp:
    def test_lists_commands(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(['help'])
        out = capsys.readouterr().out
        assert 'Available commands' in out
        assert 'palette' in out

    def test_command_docs(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(['help', 'palette'])
        assert 'Each input is adjusted at most once' in capsys.readouterr().out

    def test_unknown(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(['help', 'nope'])
        assert exc_info.value.code == 1

    def test_no_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1

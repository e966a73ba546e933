"""Tests for the commands, the registry and the color-lsp CLI."""

import argparse
import json
import pkgutil
import shutil
from pathlib import Path

import pytest
from color_lsp.__main__ import main
from color_lsp.commands.swatch import render_swatch
from color_lsp.core.env import Settings
from color_lsp.core.types import ColorValue, Document, Report
from color_lsp.registry import all_commands, discover, get
from PIL import Image

FIXTURES_DIR = Path(__file__).parent / 'fixtures'
THEME_RS = FIXTURES_DIR / 'theme.rs'
THEME_JSON = FIXTURES_DIR / 'theme.json'


def _args(tmp_path: Path, **overrides) -> argparse.Namespace:
    values = {'settings': Settings(), 'out_dir': str(tmp_path / 'swatches'), 'json': False}
    values.update(overrides)
    return argparse.Namespace(**values)


def _documents() -> list[Document]:
    return [Document(str(THEME_RS), THEME_RS.read_text(encoding='utf-8'))]


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run from a directory with no .env above it and no color-lsp settings set."""
    (tmp_path / '.git').mkdir()
    monkeypatch.chdir(tmp_path)
    for var in ('COLOR_LSP_PICKER_URL', 'COLOR_LSP_SWATCH_SIZE'):
        # setenv first so anything a .env load adds is undone afterwards
        monkeypatch.setenv(var, '')
        monkeypatch.delenv(var)
    return tmp_path


class TestRegistry:
    def test_discovers_all_commands(self):
        assert set(discover()) == {'all', 'scan', 'summarize', 'swatch'}

    def test_one_command_per_public_module(self):
        import color_lsp.commands as pkg

        modules = {name for _f, name, _p in pkgutil.iter_modules(pkg.__path__) if not name.startswith('_')}
        assert modules == set(discover())

    def test_all_commands_matches_discover(self):
        assert all_commands() is discover()

    def test_unknown_command(self):
        with pytest.raises(KeyError, match='Unknown command: nope'):
            get('nope')


class TestScanCommand:
    def test_records_matches(self, tmp_path: Path):
        report = Report()
        get('scan').execute(_documents(), report, _args(tmp_path))
        matches = report.documents[str(THEME_RS)]['commands']['scan']
        assert [m['matched'] for m in matches] == [
            'hsla(0.3, 1.0, 0.5, 1.0)',
            'hsla(0.58, 1.0, 0.5, 1.0)',
            'hsla(0.85, 0.9, 0.6, 1.0)',
            '0xeecc00',
            '0xFF000080',
        ]
        assert report.match_count == 5
        assert matches[0]['hex'] == '#33ff00'
        assert (matches[3]['line'], matches[3]['character']) == (3, 12)


class TestSummarizeCommand:
    def test_one_entry_per_distinct_color(self, tmp_path: Path):
        doc = Document('dup.css', 'a { color: #fff; } b { color: #FFFFFF; } c { color: #000; }')
        report = Report()
        get('summarize').execute([doc], report, _args(tmp_path))
        entries = report.documents['dup.css']['commands']['summarize']
        assert [e['hex'] for e in entries] == ['#ffffff', '#000000']
        assert entries[0]['summary'].startswith('Colorspace Formats:')

    def test_uses_picker_url_setting(self, tmp_path: Path):
        doc = Document('one.css', '#eecc00')
        report = Report()
        args = _args(tmp_path, settings=Settings(picker_url='https://example.test/'))
        get('summarize').execute([doc], report, args)
        summary = report.documents['one.css']['commands']['summarize'][0]['summary']
        assert summary.endswith('[Color Picker](https://example.test/#EECC00)')


class TestSwatchCommand:
    def test_render_swatch(self):
        img = render_swatch(ColorValue.from_rgba8(1, 2, 3, 4), (5, 7))
        assert img.size == (5, 7)
        assert img.mode == 'RGBA'
        assert img.getpixel((4, 6)) == (1, 2, 3, 4)

    def test_writes_pngs(self, tmp_path: Path):
        report = Report()
        get('swatch').execute(_documents(), report, _args(tmp_path))
        entries = report.documents[str(THEME_RS)]['commands']['swatch']
        assert len(entries) == 5

        first = Path(entries[0]['file'])
        assert first.name == '33ff00ff.png'
        with Image.open(first) as img:
            assert img.size == (128, 32)
            assert img.convert('RGBA').getpixel((0, 0)) == (51, 255, 0, 255)

    def test_swatch_size_setting(self, tmp_path: Path):
        report = Report()
        args = _args(tmp_path, settings=Settings(swatch_size=(8, 4)))
        get('swatch').execute([Document('x.css', '#ff000080')], report, args)
        entry = report.documents['x.css']['commands']['swatch'][0]
        assert (entry['width'], entry['height']) == (8, 4)
        with Image.open(entry['file']) as img:
            assert img.size == (8, 4)
            assert img.convert('RGBA').getpixel((0, 0)) == (255, 0, 0, 128)


class TestAllCommand:
    def test_runs_every_command(self, tmp_path: Path):
        report = Report()
        get('all').execute(_documents(), report, _args(tmp_path))
        commands = report.documents[str(THEME_RS)]['commands']
        assert set(commands) == {'scan', 'summarize', 'swatch'}


class TestCli:
    def test_scan_json(self, isolated_cwd: Path, capsys: pytest.CaptureFixture[str]):
        main(['scan', str(THEME_JSON), '--json'])
        obj = json.loads(capsys.readouterr().out)
        assert obj['summary'] == {'documents': 1, 'matches': 9}
        assert obj['documents'][0]['scan'][0]['matched'] == '#999'

    def test_scan_text(self, isolated_cwd: Path, capsys: pytest.CaptureFixture[str]):
        main(['scan', str(THEME_RS)])
        out = capsys.readouterr().out
        assert out.startswith('color-lsp: 1 file, 5 colors')
        assert '0xeecc00  → #eecc00' in out

    def test_swatch_out_dir(self, isolated_cwd: Path, capsys: pytest.CaptureFixture[str]):
        src = isolated_cwd / 'theme.rs'
        shutil.copy(THEME_RS, src)
        main(['swatch', str(src), '-o', str(isolated_cwd / 'out')])
        assert (isolated_cwd / 'out' / 'eecc00ff.png').is_file()

    def test_env_file_settings(self, isolated_cwd: Path, capsys: pytest.CaptureFixture[str]):
        env_file = isolated_cwd / 'custom.env'
        env_file.write_text('COLOR_LSP_PICKER_URL=https://example.test/\n')
        main(['--env-file', str(env_file), 'summarize', str(THEME_RS), '--json'])
        captured = capsys.readouterr()
        assert f'color-lsp: loaded {env_file}' in captured.err
        summary = json.loads(captured.out)['documents'][0]['summarize'][0]['summary']
        assert '(https://example.test/#33FF00)' in summary

    def test_missing_file(self, isolated_cwd: Path, capsys: pytest.CaptureFixture[str]):
        with pytest.raises(SystemExit) as exc:
            main(['scan', str(isolated_cwd / 'missing.css')])
        assert exc.value.code == 1
        assert 'Error: file not found' in capsys.readouterr().err

    def test_bad_swatch_size(self, isolated_cwd: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        monkeypatch.setenv('COLOR_LSP_SWATCH_SIZE', 'huge')
        with pytest.raises(SystemExit) as exc:
            main(['scan', str(THEME_RS)])
        assert exc.value.code == 1
        assert 'COLOR_LSP_SWATCH_SIZE' in capsys.readouterr().err

    def test_no_command(self, isolated_cwd: Path, capsys: pytest.CaptureFixture[str]):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 1

    def test_help_topic(self, isolated_cwd: Path, capsys: pytest.CaptureFixture[str]):
        main(['help', 'scan'])
        assert capsys.readouterr().out.startswith('List every color literal')

    def test_help_lists_commands(self, isolated_cwd: Path, capsys: pytest.CaptureFixture[str]):
        main(['help'])
        out = capsys.readouterr().out
        for name in ('all', 'scan', 'summarize', 'swatch'):
            assert f'  {name}' in out

    def test_help_unknown_topic(self, isolated_cwd: Path, capsys: pytest.CaptureFixture[str]):
        with pytest.raises(SystemExit) as exc:
            main(['help', 'nope'])
        assert exc.value.code == 1

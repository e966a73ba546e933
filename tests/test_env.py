"""Tests for color_lsp.core.env: .env loading and settings."""

import os
from pathlib import Path

import pytest
from color_lsp.core.env import (
    DEFAULT_SWATCH_SIZE,
    Settings,
    find_dotenv,
    load_env,
    load_settings,
    parse_dotenv,
    parse_size,
)
from color_lsp.core.formatter import COLOR_PICKER_URL


class TestParseDotenv:
    def test_simple_key_value(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('FOO=bar\n')
        assert parse_dotenv(f) == {'FOO': 'bar'}

    def test_quoted_values(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('KEY="hello world"\nKEY2=\'single\'\n')
        assert parse_dotenv(f) == {'KEY': 'hello world', 'KEY2': 'single'}

    def test_export_prefix(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('export COLOR_LSP_SWATCH_SIZE=64x64\n')
        assert parse_dotenv(f) == {'COLOR_LSP_SWATCH_SIZE': '64x64'}

    def test_comments_and_blank_lines_ignored(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('# comment\n\nFOO=bar\nNOEQUALS\n')
        assert parse_dotenv(f) == {'FOO': 'bar'}

    def test_value_may_contain_equals(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('COLOR_LSP_PICKER_URL=https://example.test/?c=\n')
        assert parse_dotenv(f) == {'COLOR_LSP_PICKER_URL': 'https://example.test/?c='}


class TestFindDotenv:
    def test_finds_in_parent(self, tmp_path: Path) -> None:
        subdir = tmp_path / 'sub'
        subdir.mkdir()
        dotenv = tmp_path / '.env'
        dotenv.write_text('X=1\n')
        assert find_dotenv(subdir) == dotenv

    def test_stops_at_git_dir(self, tmp_path: Path) -> None:
        repo = tmp_path / 'repo'
        (repo / '.git').mkdir(parents=True)
        (repo / 'src').mkdir()
        (tmp_path / '.env').write_text('X=1\n')
        assert find_dotenv(repo / 'src') is None

    def test_stops_at_git_file(self, tmp_path: Path) -> None:
        repo = tmp_path / 'repo'
        repo.mkdir()
        (repo / '.git').write_text('gitdir: ../somewhere\n')
        (repo / 'src').mkdir()
        (tmp_path / '.env').write_text('X=1\n')
        assert find_dotenv(repo / 'src') is None


class TestLoadEnv:
    def test_sets_missing_vars(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('TEST_COLOR_LSP_KEY', '')
        monkeypatch.delenv('TEST_COLOR_LSP_KEY')
        (tmp_path / '.env').write_text('TEST_COLOR_LSP_KEY=value\n')
        (tmp_path / '.git').mkdir()
        monkeypatch.chdir(tmp_path)
        assert load_env() == tmp_path / '.env'
        assert os.environ.get('TEST_COLOR_LSP_KEY') == 'value'

    def test_does_not_overwrite_existing(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('TEST_COLOR_LSP_KEY2', 'original')
        (tmp_path / '.env').write_text('TEST_COLOR_LSP_KEY2=fromfile\n')
        monkeypatch.chdir(tmp_path)
        load_env()
        assert os.environ.get('TEST_COLOR_LSP_KEY2') == 'original'

    def test_explicit_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('TEST_COLOR_LSP_KEY3', '')
        monkeypatch.delenv('TEST_COLOR_LSP_KEY3')
        dotenv = tmp_path / 'custom.env'
        dotenv.write_text('TEST_COLOR_LSP_KEY3=custom\n')
        assert load_env(env_file=str(dotenv)) == dotenv
        assert os.environ.get('TEST_COLOR_LSP_KEY3') == 'custom'

    def test_missing_explicit_env_file(self, tmp_path: Path) -> None:
        assert load_env(env_file=str(tmp_path / 'nope.env')) is None

    def test_returns_none_when_no_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / '.git').mkdir()
        monkeypatch.chdir(tmp_path)
        assert load_env() is None


class TestSettings:
    def test_defaults(self) -> None:
        assert load_settings({}) == Settings(picker_url=COLOR_PICKER_URL, swatch_size=DEFAULT_SWATCH_SIZE)
        assert DEFAULT_SWATCH_SIZE == (128, 32)

    def test_from_mapping(self) -> None:
        settings = load_settings({'COLOR_LSP_PICKER_URL': 'https://example.test/', 'COLOR_LSP_SWATCH_SIZE': '16x8'})
        assert settings.picker_url == 'https://example.test/'
        assert settings.swatch_size == (16, 8)

    def test_empty_values_fall_back(self) -> None:
        settings = load_settings({'COLOR_LSP_PICKER_URL': '', 'COLOR_LSP_SWATCH_SIZE': ''})
        assert settings == Settings()

    def test_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('COLOR_LSP_SWATCH_SIZE', '10X20')
        assert load_settings().swatch_size == (10, 20)


class TestParseSize:
    def test_valid(self) -> None:
        assert parse_size(' 64 x 32 ') == (64, 32)

    @pytest.mark.parametrize('value', ['64', '64x', 'x32', '64*32', '0x32', 'axb'])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ValueError):
            parse_size(value)

"""Tests for the colour-tool CLI, command registry, census and report output."""

import json
import os
from collections.abc import Iterator
from pathlib import Path

import colour_checker.commands.census
import pytest
from colour_checker.__main__ import main
from colour_checker.commands.census import hsl_census
from colour_checker.core.report import format_json, format_text
from colour_checker.core.types import Command, Hsl, Report
from colour_checker.registry import all_commands, get
from PIL import Image


ENV_KEYS = ('COLOUR_TOOL_OUTPUT', 'COLOUR_TOOL_SAMPLES')


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Run from a fake repo root so no stray .env or COLOUR_TOOL_* vars leak in."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    (tmp_path / '.git').mkdir()
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    # load_env writes os.environ directly, outside monkeypatch's undo log
    for key in ENV_KEYS:
        os.environ.pop(key, None)


@pytest.fixture
def swatch(tmp_path: Path) -> Path:
    """10x10 image: 80 pixels rgb(150, 50, 60), 20 pixels grey."""
    image = Image.new('RGB', (10, 10), (150, 50, 60))
    image.paste((128, 128, 128), (0, 0, 10, 2))
    path = tmp_path / 'swatch.png'
    image.save(path)
    return path


class TestRegistry:
    def test_discovers_commands(self):
        assert set(all_commands()) == {'convert', 'compare', 'census'}

    def test_maps_name_to_module_command(self):
        assert get('census') is colour_checker.commands.census.command
        for name, cmd in all_commands().items():
            assert cmd.name == name

    def test_get_unknown(self):
        with pytest.raises(KeyError, match='Unknown command'):
            get('nope')

    def test_command_without_run(self):
        with pytest.raises(RuntimeError):
            Command(name='empty').execute(Report(), None)


class TestConvert:
    def test_text_output(self, capsys: pytest.CaptureFixture[str]):
        main(['convert', '#96323c'])
        out = capsys.readouterr().out
        assert 'hsl: hsl(354, 50%, 39%)' in out
        assert 'hex: #96323c' in out

    def test_json_output(self, capsys: pytest.CaptureFixture[str]):
        main(['convert', 'rgb(128, 128, 128)', 'hsl(299, 78%, 12%)', '--json'])
        data = json.loads(capsys.readouterr().out)
        entries = {e['name']: e for e in data['entries']}
        grey = entries['rgb(128, 128, 128)']
        assert (grey['h'], grey['s'], grey['l']) == (0, 0, 50)
        assert entries['hsl(299, 78%, 12%)']['hsl'] == 'hsl(299, 78%, 12%)'
        assert 'hex' not in entries['hsl(299, 78%, 12%)']

    def test_output_from_env(self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('COLOUR_TOOL_OUTPUT', 'json')
        main(['convert', 'white'])
        data = json.loads(capsys.readouterr().out)
        assert data['entries'][0]['hsl'] == 'hsl(0, 0%, 100%)'

    def test_output_from_dotenv(self, isolated_env: Path, capsys: pytest.CaptureFixture[str]):
        dotenv = isolated_env / 'colour.env'
        dotenv.write_text('COLOUR_TOOL_OUTPUT=json\n')
        main(['--env-file', str(dotenv), 'convert', 'white'])
        captured = capsys.readouterr()
        assert json.loads(captured.out)['command'] == 'convert'
        assert 'colour-tool: loaded' in captured.err

    def test_bad_colour(self, capsys: pytest.CaptureFixture[str]):
        with pytest.raises(SystemExit) as exc:
            main(['convert', 'chartreuse'])
        assert exc.value.code == 1
        assert "Error: Unrecognised colour: 'chartreuse'" in capsys.readouterr().err


class TestCompare:
    def test_equal_across_representations(self, capsys: pytest.CaptureFixture[str]):
        main(['compare', 'rgb(150, 50, 60)', 'hsl(354, 50%, 39%)', '--json'])
        data = json.loads(capsys.readouterr().out)
        assert data['summary'] == {'total': 1, 'pass': 1, 'fail': 0}
        assert data['entries'][0]['pass'] is True
        assert data['entries'][0]['a_hsl'] == 'hsl(354, 50%, 39%)'

    def test_reverse_order(self, capsys: pytest.CaptureFixture[str]):
        main(['compare', 'hsl(354, 50%, 39%)', '#96323c', '--strict'])
        out = capsys.readouterr().out
        assert '✓ equal' in out
        assert 'PASS 1/1' in out

    def test_not_equal(self, capsys: pytest.CaptureFixture[str]):
        main(['compare', 'rgb(200, 100, 54)', 'hsl(19, 57%, 50%)'])
        out = capsys.readouterr().out
        assert '✗ not equal' in out
        assert 'FAIL 1/1' in out

    def test_strict_exits_after_output(self, capsys: pytest.CaptureFixture[str]):
        with pytest.raises(SystemExit) as exc:
            main(['compare', 'red', 'lime', '--strict'])
        assert exc.value.code == 1
        assert 'FAIL 1/1' in capsys.readouterr().out


class TestCensus:
    def test_counts_hsl_values(self, swatch: Path):
        with Image.open(swatch) as image:
            ranked, total = hsl_census(image)
        assert total == 100
        assert ranked == [(Hsl(354, 50, 39), 80), (Hsl(0, 0, 50), 20)]

    def test_merges_rgb_sharing_hsl(self):
        image = Image.new('RGB', (4, 1), (128, 128, 128))
        image.paste((129, 129, 129), (0, 0, 2, 1))
        ranked, total = hsl_census(image)
        assert ranked == [(Hsl(0, 0, 50), 4)]
        assert total == 4

    def test_sample_cap(self, swatch: Path):
        with Image.open(swatch) as image:
            _ranked, total = hsl_census(image, n_samples=50)
        assert total == 50

    def test_expect_pass(self, swatch: Path, capsys: pytest.CaptureFixture[str]):
        main(['census', str(swatch), '--expect', '#96323c', '--json'])
        data = json.loads(capsys.readouterr().out)
        entry = data['entries'][0]
        assert entry['top'][0] == {'hsl': 'hsl(354, 50%, 39%)', 'pct': 80.0}
        assert entry['pass'] is True
        assert data['summary']['pass'] == 1

    def test_expect_fail(self, swatch: Path, capsys: pytest.CaptureFixture[str]):
        main(['census', str(swatch), '--expect', 'gray', '--top', '1'])
        out = capsys.readouterr().out
        assert 'expected rgb(128, 128, 128)  got hsl(354, 50%, 39%)' in out
        assert 'FAIL 1/1' in out

    def test_samples_from_env(self, swatch: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('COLOUR_TOOL_SAMPLES', '10')
        main(['census', str(swatch), '--json'])
        assert json.loads(capsys.readouterr().out)['entries'][0]['samples'] == 10

    def test_empty_image_returns_nothing(self):
        assert hsl_census(Image.new('RGB', (0, 0))) == ([], 0)

    def test_empty_image_is_an_error(
        self, swatch: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setattr(colour_checker.commands.census.Image, 'open', lambda path: Image.new('RGB', (0, 0)))
        with pytest.raises(SystemExit) as exc:
            main(['census', str(swatch), '--expect', 'red'])
        assert exc.value.code == 1
        assert 'Error: image has no pixels' in capsys.readouterr().err

    @pytest.mark.parametrize('flag', ['--samples', '--top'])
    @pytest.mark.parametrize('value', ['0', '-5'])
    def test_rejects_counts_below_one(self, swatch: Path, capsys: pytest.CaptureFixture[str], flag, value):
        with pytest.raises(SystemExit) as exc:
            main(['census', str(swatch), flag, value])
        assert exc.value.code == 2
        assert 'must be at least 1' in capsys.readouterr().err

    def test_explicit_samples_win_over_env(
        self, swatch: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv('COLOUR_TOOL_SAMPLES', '10')
        main(['census', str(swatch), '--samples', '1', '--json'])
        assert json.loads(capsys.readouterr().out)['entries'][0]['samples'] == 1

    def test_missing_image(self, capsys: pytest.CaptureFixture[str]):
        with pytest.raises(SystemExit) as exc:
            main(['census', 'missing.png'])
        assert exc.value.code == 1
        assert 'Error: image not found' in capsys.readouterr().err


class TestHelp:
    def test_lists_commands(self, capsys: pytest.CaptureFixture[str]):
        main(['help'])
        out = capsys.readouterr().out
        for name in ('census', 'compare', 'convert'):
            assert name in out

    def test_prints_module_doc(self, capsys: pytest.CaptureFixture[str]):
        main(['help', 'compare'])
        assert 'Compare two colours for equality' in capsys.readouterr().out

    def test_unknown_topic(self):
        with pytest.raises(SystemExit) as exc:
            main(['help', 'nope'])
        assert exc.value.code == 1

    def test_no_command(self):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 1


class TestReport:
    def test_text_summary_only_with_checks(self):
        report = Report(command='convert')
        report.add('red', {'hsl': 'hsl(0, 100%, 50%)', 'hex': '#ff0000'})
        text = format_text(report)
        assert text.startswith('colour-tool: convert (1 entries)')
        assert 'PASS' not in text

    def test_generic_fields_fall_back(self):
        report = Report(command='compare')
        report.add('x', {'a': 'rgb(1, 2, 3)'})
        assert '  a: rgb(1, 2, 3)' in format_text(report)

    def test_record_counts(self):
        report = Report(command='compare')
        report.record_pass('a')
        report.record_fail('b')
        data = json.loads(format_json(report))
        assert data['summary'] == {'total': 2, 'pass': 1, 'fail': 1}
        assert [e['pass'] for e in data['entries']] == [True, False]

"""End-to-end tests: run navtile-tool's main() against tiles on disk."""

import json
import os
from pathlib import Path

import pytest
from PIL import Image

from navtile.__main__ import main

NAVTILE_KEYS = ['NAVTILE_STRATEGY', 'NAVTILE_DIAGNOSTICS', 'NAVTILE_PREVIEW', 'NAVTILE_LOG_LEVEL']


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Run each test from a fake repo root so no outside .env is picked up."""
    for key in NAVTILE_KEYS:
        monkeypatch.delenv(key, raising=False)
    (tmp_path / '.git').mkdir()
    monkeypatch.chdir(tmp_path)
    yield
    # load_env writes straight into os.environ
    for key in NAVTILE_KEYS:
        os.environ.pop(key, None)


def _tile(path: Path, colour, size=(2, 2)) -> Path:
    Image.new('RGB', size, colour).save(path)
    return path


class TestHelp:
    def test_lists_strategies(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(['help']) == 0
        out = capsys.readouterr().out
        assert 'exact' in out
        assert 'perceptual' in out

    def test_strategy_docs(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(['help', 'exact']) == 0
        assert 'Near-neutral' in capsys.readouterr().out

    def test_unknown_strategy(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(['help', 'nearest']) == 1
        assert 'Unknown strategy: nearest' in capsys.readouterr().err

    def test_no_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 1


class TestPalette:
    def test_prints_codes_and_hex(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(['palette']) == 0
        out = capsys.readouterr().out
        assert 'yellow' in out
        assert '#ffff32' in out
        assert 'unknown' in out


class TestEncodeCommand:
    def test_writes_raw_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        src = _tile(tmp_path / '8529.png', (255, 255, 255))
        out_dir = tmp_path / 'out'
        assert main(['perceptual', str(out_dir), str(src)]) == 0
        assert (out_dir / '8529.raw').read_bytes() == b'\x11\x11'
        out = capsys.readouterr().out
        assert 'navtile-tool: strategy perceptual' in out
        assert 'OK 1/1 tiles' in out

    def test_json_report(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        src = _tile(tmp_path / 'grey.png', (127, 127, 127))
        assert main(['perceptual', str(tmp_path / 'out'), str(src), '--json']) == 0
        report = json.loads(capsys.readouterr().out)
        assert report['summary'] == {'total': 1, 'ok': 1, 'error': 0}
        tile = report['tiles'][0]
        assert tile['bytes'] == 2
        assert tile['census'] == {'black': 2, 'white': 2}
        assert 'calibration' not in report

    def test_encode_with_strategy_flag(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        src = _tile(tmp_path / 'water.png', (0x55, 0xA6, 0xD8))
        assert main(['encode', str(tmp_path / 'out'), str(src), '--strategy', 'exact', '-j']) == 0
        assert json.loads(capsys.readouterr().out)['strategy'] == 'exact'
        assert (tmp_path / 'out' / 'water.raw').read_bytes() == b'\x33\x33'

    def test_encode_uses_env_strategy(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv('NAVTILE_STRATEGY', 'exact')
        src = _tile(tmp_path / 'tile.png', (0, 0, 0))
        assert main(['encode', str(tmp_path / 'out'), str(src), '-j']) == 0
        assert json.loads(capsys.readouterr().out)['strategy'] == 'exact'

    def test_encode_defaults_to_perceptual(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        src = _tile(tmp_path / 'tile.png', (0, 0, 0))
        assert main(['encode', str(tmp_path / 'out'), str(src), '-j']) == 0
        assert json.loads(capsys.readouterr().out)['strategy'] == 'perceptual'

    def test_unknown_strategy(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        src = _tile(tmp_path / 'tile.png', (0, 0, 0))
        assert main(['encode', str(tmp_path / 'out'), str(src), '-s', 'nearest']) == 1
        assert 'Unknown strategy: nearest' in capsys.readouterr().err

    def test_several_tiles(self, tmp_path: Path) -> None:
        a = _tile(tmp_path / 'a.png', (255, 255, 255))
        b = _tile(tmp_path / 'b.png', (0, 0, 0), size=(4, 1))
        out_dir = tmp_path / 'out'
        assert main(['-q', 'perceptual', str(out_dir), str(a), str(b)]) == 0
        assert (out_dir / 'a.raw').read_bytes() == b'\x11\x11'
        assert (out_dir / 'b.raw').read_bytes() == b'\x00\x00'


class TestErrors:
    def test_undecodable_tile(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        bad = tmp_path / 'bad.png'
        bad.write_bytes(b'not an image')
        good = _tile(tmp_path / 'good.png', (255, 255, 255))
        out_dir = tmp_path / 'out'
        assert main(['perceptual', str(out_dir), str(bad), str(good), '--json']) == 1
        report = json.loads(capsys.readouterr().out)
        assert report['summary'] == {'total': 2, 'ok': 1, 'error': 1}
        assert 'error' in report['tiles'][0]
        assert not (out_dir / 'bad.raw').exists()
        assert (out_dir / 'good.raw').exists()

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(['perceptual', str(tmp_path / 'out'), str(tmp_path / 'missing.png')]) == 1
        out = capsys.readouterr().out
        assert 'error: cannot read' in out
        assert 'ERROR 1/1 tiles' in out

    def test_bad_setting(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        monkeypatch.setenv('NAVTILE_LOG_LEVEL', 'chatty')
        assert main(['palette']) == 1
        assert 'NAVTILE_LOG_LEVEL' in capsys.readouterr().err


class TestCalibrate:
    def test_unmatched_colours_reported(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        src = _tile(tmp_path / 'odd.png', (1, 200, 77), size=(2, 1))
        assert main(['exact', str(tmp_path / 'out'), str(src), '--calibrate', '--json']) == 0
        cal = json.loads(capsys.readouterr().out)['calibration']
        assert cal['unmatched_total'] == 2
        assert cal['unmatched'] == [{'hex': '01c84d', 'count': 2}]
        assert cal['entries'] == ['ExactEntry((0x01, 0xc8, 0x4d), solid(BLACK)),']

    def test_text_output(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        src = _tile(tmp_path / 'odd.png', (1, 200, 77), size=(2, 1))
        assert main(['exact', str(tmp_path / 'out'), str(src), '-c']) == 0
        out = capsys.readouterr().out
        assert 'unmatched colours: 1 (2 pixels)' in out
        assert 'ExactEntry((0x01, 0xc8, 0x4d), solid(BLACK)),' in out

    def test_diagnostics_go_to_stderr(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        src = _tile(tmp_path / 'grey.png', (127, 127, 127), size=(2, 1))
        assert main(['perceptual', str(tmp_path / 'out'), str(src), '-d', '-j']) == 0
        captured = capsys.readouterr()
        assert '7f7f7f' in captured.err
        json.loads(captured.out)


class TestPreview:
    def test_flag_writes_png(self, tmp_path: Path) -> None:
        src = _tile(tmp_path / 'grey.png', (127, 127, 127))
        out_dir = tmp_path / 'out'
        assert main(['perceptual', str(out_dir), str(src), '--preview']) == 0
        with Image.open(out_dir / 'grey.preview.png') as img:
            assert img.size == (2, 2)
            assert img.getpixel((0, 0)) == (0, 0, 0)
            assert img.getpixel((1, 0)) == (255, 255, 255)

    def test_dotenv_enables_preview(self, tmp_path: Path) -> None:
        (tmp_path / '.env').write_text('NAVTILE_PREVIEW=1\n')
        src = _tile(tmp_path / 'white.png', (255, 255, 255))
        out_dir = tmp_path / 'out'
        assert main(['perceptual', str(out_dir), str(src)]) == 0
        assert (out_dir / 'white.preview.png').exists()

    def test_no_preview_by_default(self, tmp_path: Path) -> None:
        src = _tile(tmp_path / 'white.png', (255, 255, 255))
        out_dir = tmp_path / 'out'
        assert main(['perceptual', str(out_dir), str(src)]) == 0
        assert not (out_dir / 'white.preview.png').exists()


class TestOutputNames:
    def test_relative_directories_kept(self, tmp_path: Path) -> None:
        (tmp_path / 'a').mkdir()
        (tmp_path / 'b').mkdir()
        _tile(tmp_path / 'a' / '5.png', (255, 255, 255))
        _tile(tmp_path / 'b' / '5.png', (0, 0, 0))
        assert main(['-q', 'perceptual', 'out', 'a/5.png', 'b/5.png']) == 0
        assert (tmp_path / 'out' / 'a' / '5.raw').read_bytes() == b'\x11\x11'
        assert (tmp_path / 'out' / 'b' / '5.raw').read_bytes() == b'\x00\x00'

    def test_slippy_map_layout(self, tmp_path: Path) -> None:
        (tmp_path / '14' / '8529').mkdir(parents=True)
        _tile(tmp_path / '14' / '8529' / '5975.png', (255, 255, 255))
        assert main(['-q', 'perceptual', 'tiles', '14/8529/5975.png', '--preview']) == 0
        assert (tmp_path / 'tiles' / '14' / '8529' / '5975.raw').exists()
        assert (tmp_path / 'tiles' / '14' / '8529' / '5975.preview.png').exists()

    def test_clashing_absolute_inputs(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (tmp_path / 'a').mkdir()
        (tmp_path / 'b').mkdir()
        first = _tile(tmp_path / 'a' / '5.png', (255, 255, 255))
        second = _tile(tmp_path / 'b' / '5.png', (0, 0, 0))
        out_dir = tmp_path / 'out'
        assert main(['-q', 'perceptual', str(out_dir), str(first), str(second), '-j']) == 1
        report = json.loads(capsys.readouterr().out)
        assert report['summary'] == {'total': 2, 'ok': 1, 'error': 1}
        assert 'clashes' in report['tiles'][1]['error']
        assert (out_dir / '5.raw').read_bytes() == b'\x11\x11'


class TestWriteErrors:
    def test_unwritable_raw_continues(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        out_dir = tmp_path / 'out'
        (out_dir / 'blocked.raw').mkdir(parents=True)
        blocked = _tile(tmp_path / 'blocked.png', (255, 255, 255))
        good = _tile(tmp_path / 'good.png', (255, 255, 255))
        assert main(['-q', 'perceptual', str(out_dir), str(blocked), str(good), '-j']) == 1
        report = json.loads(capsys.readouterr().out)
        assert report['summary'] == {'total': 2, 'ok': 1, 'error': 1}
        assert report['tiles'][0]['error'].startswith('cannot write')
        assert (out_dir / 'good.raw').read_bytes() == b'\x11\x11'

    def test_unwritable_preview(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        out_dir = tmp_path / 'out'
        (out_dir / 'tile.preview.png').mkdir(parents=True)
        src = _tile(tmp_path / 'tile.png', (255, 255, 255))
        assert main(['-q', 'perceptual', str(out_dir), str(src), '--preview']) == 1
        assert 'error: cannot write' in capsys.readouterr().out

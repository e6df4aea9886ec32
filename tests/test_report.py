"""Tests for navtile.core.report — text and JSON formatting."""

import json

from navtile.core.report import format_json, format_text
from navtile.core.types import EncodeReport


def _report() -> EncodeReport:
    report = EncodeReport(strategy='exact')
    report.add_tile('a.png', (4, 2), 'out/a.raw', 4, {'white': 6, 'black': 2}, preview_path='out/a.preview.png')
    report.add_error('b.png', 'Cannot decode image (3 bytes)')
    return report


class TestFormatText:
    def test_tile_lines(self):
        text = format_text(_report())
        assert text.startswith('navtile-tool: strategy exact')
        assert '── a.png (4×2)' in text
        assert 'wrote: out/a.raw (4 bytes)' in text
        assert 'preview: out/a.preview.png' in text
        assert 'census: white:75.0%, black:25.0%' in text

    def test_error_and_totals(self):
        text = format_text(_report())
        assert 'error: Cannot decode image (3 bytes)' in text
        assert text.endswith('OK 1/2 tiles  ERROR 1/2 tiles')

    def test_no_preview_line_without_preview(self):
        report = EncodeReport(strategy='perceptual')
        report.add_tile('a.png', (1, 1), 'out/a.raw', 0, {'red': 1})
        assert 'preview:' not in format_text(report)

    def test_calibration_block(self):
        report = EncodeReport(strategy='exact')
        report.calibration = {
            'unmatched_total': 5,
            'unmatched': [{'hex': '010203', 'count': 5}],
            'matches': {},
            'entries': ['ExactEntry((0x01, 0x02, 0x03), solid(BLACK)),'],
        }
        text = format_text(report)
        assert 'unmatched colours: 1 (5 pixels)' in text
        assert '    ExactEntry((0x01, 0x02, 0x03), solid(BLACK)),' in text


class TestFormatJson:
    def test_structure(self):
        obj = json.loads(format_json(_report()))
        assert obj['strategy'] == 'exact'
        assert obj['summary'] == {'total': 2, 'ok': 1, 'error': 1}
        assert obj['tiles'][0]['width'] == 4
        assert obj['tiles'][1] == {'image': 'b.png', 'error': 'Cannot decode image (3 bytes)'}
        assert 'calibration' not in obj

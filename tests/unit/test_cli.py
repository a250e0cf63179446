"""Unit tests for the command-line entry point"""

from click.testing import CliRunner

from mirror_accent.__main__ import main


class TestCli:
    """Tests for `python -m mirror_accent TARGET USER`"""

    def test_prints_text_report(self, tmp_path, make_vowel, to_wav_bytes):
        buffer = make_vowel()
        path = tmp_path / 'target.wav'
        path.write_bytes(to_wav_bytes(buffer.samples, buffer.sample_rate))

        result = CliRunner().invoke(main, [str(path), str(path)])

        assert result.exit_code == 0, result.output
        assert 'Сходство с эталоном:' in result.output
        assert 'Great work!' in result.output

    def test_writes_html_report(self, tmp_path, make_vowel, to_wav_bytes):
        target, user = tmp_path / 'target.wav', tmp_path / 'user.wav'
        target.write_bytes(to_wav_bytes(make_vowel(f0=120.0).samples, 16000))
        user.write_bytes(to_wav_bytes(make_vowel(f0=200.0).samples, 16000))
        html_path = tmp_path / 'report.html'

        result = CliRunner().invoke(main, [str(target), str(user), '--html', str(html_path)])

        assert result.exit_code == 0, result.output
        assert 'data:image/png;base64,' in html_path.read_text(encoding='utf-8')

    def test_unsupported_file_exits_with_error(self, tmp_path):
        path = tmp_path / 'notes.txt'
        path.write_text('not audio')

        result = CliRunner().invoke(main, [str(path), str(path)])

        assert result.exit_code == 1

    def test_missing_file_is_usage_error(self, tmp_path):
        result = CliRunner().invoke(main, [str(tmp_path / 'a.wav'), str(tmp_path / 'b.wav')])
        assert result.exit_code == 2

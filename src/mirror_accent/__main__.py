"""Точка входа mirror_accent как модуля: сравнение двух аудиофайлов."""

import importlib.util
import sys

import click

from mirror_accent.errors import MirrorAccentError
from mirror_accent.log import setup_logger

log = setup_logger('main')


def check_environment() -> bool:
    """Проверяет наличие необходимых зависимостей."""
    required = [
        'numpy', 'scipy', 'librosa',
        'soundfile', 'pydub',
    ]
    missing = [
        pkg for pkg in required
        if importlib.util.find_spec(pkg) is None
    ]

    if missing:
        log.error(
            'Не установлены основные пакеты: %s',
            missing,
        )
        return False

    if importlib.util.find_spec('matplotlib') is None:
        log.warning('matplotlib не установлен, графики недоступны')

    return True


@click.command()
@click.argument('target', type=click.Path(exists=True, dir_okay=False))
@click.argument('user', type=click.Path(exists=True, dir_okay=False))
@click.option('--workers', '-w', type=int, default=None,
              help='Число процессов для анализа двух записей.')
@click.option('--html', 'html_path', type=click.Path(dir_okay=False), default=None,
              help='Сохранить HTML-отчёт с графиками в файл.')
def main(target: str, user: str, workers: int | None, html_path: str | None) -> None:
    """Сравнивает просодию записи USER с эталоном TARGET."""
    if not check_environment():
        log.critical(
            'Приложение не запущено из-за ошибок окружения.',
        )
        sys.exit(1)

    from mirror_accent.services.comparison import compare_recordings
    from mirror_accent.services.decoding import load_audio
    from mirror_accent.services.report import ProsodyReport

    try:
        comparison = compare_recordings(load_audio(target), load_audio(user), workers=workers)
    except MirrorAccentError as exc:
        log.error('Сравнение не выполнено: %s', exc)
        sys.exit(1)

    report = ProsodyReport(comparison)
    click.echo(report.generate_text_report())

    if html_path:
        from mirror_accent.ui.visualization import create_prosody_visualization

        report.add_visualization(
            'Контуры просодии',
            create_prosody_visualization(comparison.target, comparison.user),
        )
        with open(html_path, 'w', encoding='utf-8') as f:
            f.write(report.generate_html_report())
        log.info('HTML-отчёт сохранён: %s', html_path)


if __name__ == '__main__':
    main()

import datetime
import html
import math

from mirror_accent.services.comparison import ComparisonReport
from mirror_accent.types import ScoreSet

SCORE_LABELS = {
    'f0': 'Основной тон (F0)',
    'formants': 'Форманты (гласные)',
    'intensity': 'Интенсивность (ударения)',
    'speaking_rate': 'Темп речи',
    'pitch_range': 'Диапазон тона',
    'duration': 'Длительность',
}


def to_percent(score: float) -> int:
    """Оценка [0, 1] в целые проценты с округлением половины вверх."""
    return int(math.floor(score * 100 + 0.5))


def format_scores(scores: ScoreSet) -> dict[str, str]:
    """Все оценки в виде строк с процентами, включая итоговую."""
    return {name: f"{to_percent(value)}%" for name, value in scores.as_dict().items()}


class ProsodyReport:
    """Отчёт о сравнении просодии эталона и попытки пользователя."""

    def __init__(self, comparison: ComparisonReport, prompt: str | None = None):
        """
        Args:
            comparison: Результат сравнения двух записей
            prompt: Текст фразы, если известен
        """
        self.comparison = comparison
        self.prompt = prompt
        self.date = datetime.datetime.now().strftime("%d.%m.%Y %H:%M")
        self.visualizations: dict[str, str] = {}

    def add_visualization(self, name: str, image_data: str):
        """
        Добавляет визуализацию в отчет.

        Args:
            name: Название визуализации
            image_data: Данные изображения в формате base64
        """
        self.visualizations[name] = image_data

    def generate_text_report(self) -> str:
        scores = format_scores(self.comparison.scores)
        lines = [f"Сходство с эталоном: {scores['overall']}"]
        if self.prompt:
            lines.insert(0, f"Фраза: {self.prompt}")

        for name, label in SCORE_LABELS.items():
            lines.append(f"  {label}: {scores[name]}")

        lines.append("Рекомендации:")
        lines.extend(f"  - {message}" for message in self.comparison.feedback)

        return "\n".join(lines)

    def generate_html_report(self) -> str:
        """
        Генерирует HTML-версию отчета.

        Returns:
            HTML-код отчета
        """
        scores = format_scores(self.comparison.scores)
        prompt = f"<p><i>{html.escape(self.prompt)}</i></p>" if self.prompt else ""

        rows = "".join(
            f"<tr><td>{label}</td><td>{scores[name]}</td></tr>"
            for name, label in SCORE_LABELS.items()
        )
        feedback = "".join(f"<li>{html.escape(message)}</li>" for message in self.comparison.feedback)
        images = "".join(
            f'<h4>{html.escape(name)}</h4><img src="data:image/png;base64,{data}"/>'
            for name, data in self.visualizations.items()
        )

        return f"""
                <!DOCTYPE html>
                <html>
                <head>
                    <meta charset="UTF-8">
                    <title>Сравнение произношения от {self.date}</title>
                    <style>
                        body {{ font-family: Arial, sans-serif; margin: 0; padding: 20px; }}
                        table {{ border-collapse: collapse; }}
                        th, td {{ border: 1px solid #ddd; padding: 8px; text-align: left; }}
                        th {{ background-color: #f0f0f0; }}
                    </style>
                </head>
                <body>
                    <h1>Сходство с эталоном: {scores['overall']}</h1>
                    {prompt}
                    <table>
                        <tr><th>Измерение</th><th>Оценка</th></tr>
                        {rows}
                    </table>
                    <h3>Рекомендации</h3>
                    <ul>{feedback}</ul>
                    {images}
                </body>
                </html>
                """

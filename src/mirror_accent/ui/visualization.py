import base64
import io

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from mirror_accent.types import FeatureBundle


def _masked(values):
    """Нулевые (невычисленные) значения не рисуются."""
    values = values.astype(float)
    values[values <= 0] = float('nan')
    return values


def create_prosody_visualization(target: FeatureBundle, user: FeatureBundle) -> str:
    """
    Рисует контуры эталона и попытки пользователя: F0, интенсивность, F1/F2.

    Args:
        target: Признаки эталонной записи
        user: Признаки записи пользователя

    Returns:
        PNG-изображение в base64
    """
    fig, ax = plt.subplots(3, 1, figsize=(12, 10))

    # 1. Основной тон
    ax[0].plot(target.f0.times, _masked(target.f0.values), '.', label='Эталон')
    ax[0].plot(user.f0.times, _masked(user.f0.values), '.', label='Попытка')
    ax[0].set_ylabel('F0 (Hz)')
    ax[0].set_title('Контур основного тона')
    ax[0].legend()

    # 2. Интенсивность
    ax[1].plot(target.intensity.times, target.intensity.values, label='Эталон')
    ax[1].plot(user.intensity.times, user.intensity.values, label='Попытка')
    ax[1].set_ylabel('дБ')
    ax[1].set_title('Интенсивность')
    ax[1].legend()

    # 3. Форманты F1/F2
    for bundle, marker, name in ((target, 'o', 'Эталон'), (user, 'x', 'Попытка')):
        ax[2].plot(bundle.formants.times, _masked(bundle.formants.f1.values), marker,
                   markersize=3, label=f'F1 {name}')
        ax[2].plot(bundle.formants.times, _masked(bundle.formants.f2.values), marker,
                   markersize=3, label=f'F2 {name}')
    ax[2].set_ylabel('Частота (Hz)')
    ax[2].set_xlabel('Время (с)')
    ax[2].set_title('Форманты F1/F2')
    ax[2].legend()

    plt.tight_layout()

    buffer = io.BytesIO()
    fig.savefig(buffer, format='png')
    plt.close(fig)

    return base64.b64encode(buffer.getvalue()).decode('ascii')

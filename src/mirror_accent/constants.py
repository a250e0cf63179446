"""Все константы проекта mirror_accent.

Единственный источник правды для числовых параметров анализа
просодии: сетка фреймов, диапазоны тона, параметры LPC,
нормировки и веса сравнения.
"""

# ── Сетка фреймов ────────────────────────────────
FRAME_DURATION_S = 0.025
HOP_DURATION_S = 0.010
FRAME_RATE = 1.0 / HOP_DURATION_S  # 100 фреймов в секунду

# ── Основной тон (F0) ────────────────────────────
PITCH_FMIN = 50
PITCH_FMAX = 400
VOICING_THRESHOLD = 0.1

# ── Форманты (LPC) ───────────────────────────────
LPC_ORDER = 12
PRE_EMPHASIS = 0.97
FORMANT_MIN_FREQUENCY = 200.0
FORMANT_MAX_FREQUENCY = 5000.0
FORMANT_MAX_BANDWIDTH = 500.0
FORMANT_COUNT = 3

# ── Поиск корней (Дюран-Кернер) ──────────────────
ROOT_INITIAL_RADIUS = 0.9
ROOT_ITERATIONS = 50

# ── Интенсивность и темп ─────────────────────────
INTENSITY_EPSILON = 1e-10
RATE_SMOOTHING_WINDOW = 5

# ── Сравнение ────────────────────────────────────
DTW_MAX_POINTS = 100
F1_NORMALIZER = 500.0
F2_NORMALIZER = 800.0
RATE_NORMALIZER = 3.0
PITCH_SPAN_NORMALIZER = 100.0
NEUTRAL_PITCH_RANGE_SCORE = 0.5

DEFAULT_WEIGHTS: dict[str, float] = {
    'f0': 0.25,
    'formants': 0.20,
    'intensity': 0.15,
    'speaking_rate': 0.15,
    'pitch_range': 0.15,
    'duration': 0.10,
}

# ── Обратная связь ───────────────────────────────
FEEDBACK_THRESHOLD = 0.6
PITCH_LOW_RATIO = 0.9
PITCH_HIGH_RATIO = 1.1
PITCH_SPAN_RATIO = 0.7
RATE_SLOW_RATIO = 0.8
RATE_FAST_RATIO = 1.2

# ── Аудио ────────────────────────────────────────
SUPPORTED_EXTENSIONS = frozenset(
    {'.wav', '.mp3', '.m4a', '.flac', '.ogg', '.webm'},
)

# ── Практика ─────────────────────────────────────
ACCENTS = (
    'british-rp',
    'american-general',
    'australian',
    'irish',
    'indian',
    'south-african',
)

PRACTICE_PROMPTS = (
    "The weather today is absolutely beautiful, isn't it?",
    'Could you please pass me that book on the table?',
    "I've been thinking about going to the cinema this weekend.",
    'What time does the train arrive at the station?',
    'She asked if we could meet for coffee tomorrow morning.',
    'The restaurant around the corner serves excellent food.',
    "I haven't seen such a magnificent sunset in years.",
    'Would you mind helping me carry these bags upstairs?',
    "They're planning to renovate the old building next month.",
    "I'd rather stay home and read a good book tonight.",
)

"""Поиск комплексных корней полиномов методом Дюрана-Кернера."""

import numpy as np

from mirror_accent.constants import ROOT_INITIAL_RADIUS, ROOT_ITERATIONS


# coeffs[:, 0] - старший коэффициент: для LPC-вектора a корни совпадают
# с полюсами 1/A(z), а не с обратными к ним величинами
def evaluate_polynomial(coeffs: np.ndarray, z: np.ndarray) -> np.ndarray:
    """Схема Горнера для набора полиномов: coeffs (n, p+1) от старшей степени, z (n,)."""
    result = np.zeros(z.shape, dtype=np.complex128) + coeffs[:, 0]
    for k in range(1, coeffs.shape[1]):
        result = result * z + coeffs[:, k]
    return result


def durand_kerner(coeffs: np.ndarray,
                  iterations: int = ROOT_ITERATIONS,
                  radius: float = ROOT_INITIAL_RADIUS) -> np.ndarray:
    """
    Находит все корни полиномов итерациями Дюрана-Кернера (Вейерштрасса).

    Начальные приближения равномерно расположены на окружности радиуса 0.9.
    На каждой итерации каждый корень по очереди сдвигается на
    P(z_i) / Π_{j≠i}(z_i - z_j) с учётом уже обновлённых соседей.
    Число итераций фиксировано, досрочного выхода по сходимости нет.

    Полиномы обрабатываются пачкой: одна строка coeffs = один полином.

    Args:
        coeffs: Коэффициенты (p+1,) или (n, p+1), от старшей степени к младшей
        iterations: Число итераций
        radius: Радиус окружности начальных приближений

    Returns:
        Массив корней (p,) или (n, p); приближение с нулевой или нечисловой
        поправкой на итерации не сдвигается
    """
    coeffs = np.asarray(coeffs, dtype=np.float64)
    single = coeffs.ndim == 1
    coeffs = np.atleast_2d(coeffs)

    n_poly, n_coeffs = coeffs.shape
    degree = n_coeffs - 1
    if degree < 1:
        roots = np.empty((n_poly, 0), dtype=np.complex128)
        return roots[0] if single else roots

    # Метод требует приведённого полинома
    leading = coeffs[:, :1]
    coeffs = np.divide(coeffs, leading, out=np.zeros_like(coeffs), where=leading != 0)

    angles = 2 * np.pi * np.arange(degree) / degree
    roots = np.tile(radius * np.exp(1j * angles), (n_poly, 1))

    with np.errstate(all='ignore'):
        for _ in range(iterations):
            for i in range(degree):
                current = roots[:, i]
                diffs = current[:, None] - roots
                diffs[:, i] = 1.0
                denominator = np.prod(diffs, axis=1)

                value = evaluate_polynomial(coeffs, current)
                safe = denominator != 0
                correction = np.zeros_like(current)
                correction[safe] = value[safe] / denominator[safe]
                correction[~np.isfinite(correction)] = 0.0
                roots[:, i] = current - correction

    return roots[0] if single else roots

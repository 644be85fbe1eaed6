"""
engine.py

Ітераційний двигун для запуску правил оновлення (Optimizer).

Функціонал:
    - виконує цикл θ_{k+1} = step(θ_k), доки критерій зупинки дозволяє;
    - весь стан запуску (θ, steps, величина останнього кроку, траса)
      належить одному виклику run() і повертається в OptimizationRunResult;
    - фіксує стан виходу: CONVERGED / MAX_STEPS_REACHED / DIVERGED;
    - рахує кількість викликів SSE та похідних;
    - підтримує callback на кожній ітерації (для візуалізації / логів).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

from .config import check_flag, check_max_steps, check_threshold
from .convergence import ConvergenceCriterion, ExitState, StepSizeCriterion
from .functions import ArrayLike, AffineModel
from .iteration_result import StepRecord
from .optimizer_base import Optimizer, StepResult

logger = logging.getLogger(__name__)


@dataclass
class OptimizationRunResult:
    """
    Підсумок одного запуску.

    Атрибути:
        method_name        - назва правила (Optimizer.name)
        model              - схема параметрів (які коефіцієнти підбирались)
        parameters         - кінцевий вектор θ
        loss               - SSE(θ)
        exit_state         - CONVERGED / MAX_STEPS_REACHED / DIVERGED
        steps              - кількість виконаних ітерацій
        initial_parameters - θ_0
        initial_loss       - SSE(θ_0)
        trajectory         - список StepRecord, по одному на ітерацію
        loss_evals         - кількість викликів SSE
        grad_evals         - кількість обчислених похідних
        learning_rate      - learning rate правила
    """
    method_name: str
    model: AffineModel
    parameters: np.ndarray
    loss: float
    exit_state: ExitState
    steps: int
    initial_parameters: np.ndarray
    initial_loss: float
    trajectory: List[StepRecord]
    loss_evals: int
    grad_evals: int
    learning_rate: float

    @property
    def intercept(self) -> float:
        return self.model.unpack(self.parameters)[0]

    @property
    def slope(self) -> float:
        return self.model.unpack(self.parameters)[1]

    @property
    def last_step_magnitude(self) -> float:
        if not self.trajectory:
            return math.inf
        return self.trajectory[-1].step_magnitude

    @property
    def succeeded(self) -> bool:
        """CONVERGED і MAX_STEPS_REACHED є штатними завершеннями."""
        return self.exit_state in (ExitState.CONVERGED, ExitState.MAX_STEPS_REACHED)

    def trajectory_frame(self):
        """
        pandas.DataFrame з трасою: index, intercept, slope, loss, step_*,
        step_magnitude, по одному рядку на ітерацію.
        """
        import pandas as pd

        names = self.model.parameter_names
        rows = []
        for rec in self.trajectory:
            intercept, slope = self.model.unpack(rec.parameters)
            row = {
                "index": rec.index,
                "intercept": intercept,
                "slope": slope,
                "loss": rec.loss,
                "step_magnitude": rec.step_magnitude,
            }
            for name, value in zip(names, rec.step):
                row[f"step_{name}"] = float(value)
            rows.append(row)

        columns = ["index", "intercept", "slope", "loss"]
        columns += [f"step_{name}" for name in names]
        columns.append("step_magnitude")
        return pd.DataFrame(rows, columns=columns)


# Тип callback'а для візуалізації / логів
IterationCallback = Callable[[StepRecord], None]


class OptimizationEngine:
    """
    Движок, який керує ітераційним процесом для заданого Optimizer.

    Налаштування за замовчуванням (можуть бути переозначені у run()):
        min_step  : поріг для max |step_i| (default: 1e-3)
        max_steps : максимальна кількість ітерацій (default: 1000)
    """

    def __init__(self, min_step: float = 1e-3, max_steps: int = 1000) -> None:
        self.min_step_default = check_threshold("min_step", min_step)
        self.max_steps_default = check_max_steps(max_steps)

    def run(
        self,
        optimizer: Optimizer,
        initial_parameters: ArrayLike,
        max_steps: Optional[int] = None,
        min_step: Optional[float] = None,
        criterion: Optional[ConvergenceCriterion] = None,
        callback: Optional[IterationCallback] = None,
        detect_divergence: bool = True,
    ) -> OptimizationRunResult:
        """
        Запустити градієнтний спуск з θ_0 = initial_parameters.

        Якщо criterion не задано, використовується StepSizeCriterion
        (min_step, max_steps). Якщо задано і criterion, і max_steps,
        діє менше з двох обмежень. Цикл виконується щонайменше один раз.
        Некоректні max_steps / min_step дають ConfigurationError.
        """
        if max_steps is not None:
            max_steps = check_max_steps(max_steps)
        if min_step is not None:
            min_step = check_threshold("min_step", min_step)
        check_flag("detect_divergence", detect_divergence)

        if criterion is None:
            max_steps = max_steps if max_steps is not None else self.max_steps_default
            min_step = min_step if min_step is not None else self.min_step_default
            criterion = StepSizeCriterion(min_step=min_step, max_steps=max_steps)

        step_limit = criterion.max_steps
        if max_steps is not None:
            step_limit = min(step_limit, max_steps)

        optimizer.reset()

        theta = np.array(initial_parameters, dtype=float)
        theta0 = theta.copy()
        loss0 = optimizer.eval_loss(theta)

        logger.info(
            "Старт %s: θ0=%s, SSE=%.6g, learning_rate=%g, max_steps=%d",
            optimizer.name, theta0.tolist(), loss0, optimizer.learning_rate,
            step_limit,
        )

        trajectory: List[StepRecord] = []
        steps = 0
        last_step_magnitude = math.inf
        loss_delta = math.inf
        loss_k = loss0
        state = ExitState.RUNNING

        while steps < step_limit and criterion.should_continue(
            steps, last_step_magnitude, loss_delta
        ):
            # inf/nan при розбіжності обробляються нижче, без RuntimeWarning
            with np.errstate(over="ignore", invalid="ignore"):
                res: StepResult = optimizer.step(theta)
            steps += 1

            theta = res.parameters
            last_step_magnitude = float(res.step_magnitude)
            loss_delta = abs(res.loss - loss_k)
            loss_k = res.loss

            rec = StepRecord(
                index=steps,
                parameters=theta.copy(),
                loss=res.loss,
                step=np.array(res.step, dtype=float),
                step_magnitude=last_step_magnitude,
                gradient=np.array(res.gradient, dtype=float),
                meta=dict(res.meta or {}),
            )
            trajectory.append(rec)

            logger.debug(
                "k=%d θ=%s SSE=%.6g |step|=%.6g",
                steps, rec.parameters.tolist(), rec.loss, last_step_magnitude,
            )

            if callback is not None:
                callback(rec)

            if detect_divergence and not (
                np.all(np.isfinite(theta))
                and np.all(np.isfinite(rec.step))
                and math.isfinite(rec.loss)
            ):
                state = ExitState.DIVERGED
                logger.warning(
                    "%s: розбіжність на ітерації %d (θ=%s); зменште learning_rate",
                    optimizer.name, steps, theta.tolist(),
                )
                break
        else:
            state = criterion.exit_state(steps, last_step_magnitude, loss_delta)
            if state == ExitState.RUNNING:
                # зупинились на step_limit, меншому за criterion.max_steps
                state = ExitState.MAX_STEPS_REACHED

        result = OptimizationRunResult(
            method_name=optimizer.name,
            model=optimizer.model,
            parameters=theta.copy(),
            loss=float(loss_k),
            exit_state=state,
            steps=steps,
            initial_parameters=theta0,
            initial_loss=float(loss0),
            trajectory=trajectory,
            loss_evals=optimizer.loss_evals,
            grad_evals=optimizer.grad_evals,
            learning_rate=optimizer.learning_rate,
        )

        logger.info(
            "Кінець %s: стан=%s, ітерацій=%d, θ*=%s, SSE=%.6g",
            result.method_name, state.value, steps, result.parameters.tolist(), result.loss,
        )

        return result


__all__ = [
    "OptimizationRunResult",
    "IterationCallback",
    "OptimizationEngine",
]

"""Propietario del estimador activo y de sus cambios de modo.

Construir, consultar y liberar un estimador son operaciones bloqueantes, así
que se delegan a un ``Executor`` de un único hilo (FIFO): una inferencia
enviada antes que la liberación de su estimador siempre se ejecuta primero.
El hilo del bucle de render observa la finalización sondeando los ``Future``
con ``poll()``, de modo que todo el estado de esta clase se modifica siempre
desde ese mismo hilo.

Cada construcción incrementa la *generación*; un resultado solo es aceptable si
su generación coincide con la del estimador publicado en ese momento."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

from src.core.errors import ConstructionFailure, EstimationFailure, StaleResult
from src.core.types import LifecycleState, SubjectMode, as_mode

from .estimators.base import PoseEstimatorBase
from .types import Pose

logger = logging.getLogger(__name__)

EstimatorFactory = Callable[[SubjectMode], PoseEstimatorBase]
StatusListener = Callable[["LifecycleStatus"], None]

__all__ = [
    "EstimatorFactory",
    "EstimatorHandle",
    "EstimatorLifecycle",
    "LifecycleStatus",
    "PendingEstimate",
]


@dataclass
class EstimatorHandle:
    """Estimador construido junto con el modo y la generación que lo identifican."""

    estimator: PoseEstimatorBase
    mode: SubjectMode
    generation: int
    ready: bool = False


@dataclass(frozen=True)
class PendingEstimate:
    """Inferencia en curso etiquetada con la generación que la despachó."""

    generation: int
    future: Future

    def done(self) -> bool:
        return self.future.done()

    def poses(self) -> List[Pose]:
        """Resultado de la inferencia; los errores se elevan como ``EstimationFailure``."""

        try:
            return list(self.future.result())
        except Exception as exc:
            raise EstimationFailure(f"Pose estimation failed: {exc}") from exc


@dataclass(frozen=True)
class LifecycleStatus:
    state: LifecycleState
    mode: Optional[SubjectMode]
    target: Optional[SubjectMode]
    generation: int
    error: Optional[str] = None

    @property
    def transitioning(self) -> bool:
        return self.state in (LifecycleState.CREATING, LifecycleState.DISPOSING)


def _dispose(handle: EstimatorHandle) -> None:
    try:
        handle.estimator.close()
    except Exception:
        logger.exception(
            "Error while disposing %s estimator (generation %d)", handle.mode.value, handle.generation
        )


class EstimatorLifecycle:
    """Máquina de estados IDLE → CREATING → READY → DISPOSING → CREATING ..."""

    def __init__(self, factory: EstimatorFactory, *, executor: Optional[Executor] = None) -> None:
        self._factory = factory
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="estimator")
        self._state = LifecycleState.IDLE
        self._generation = 0
        self._handle: Optional[EstimatorHandle] = None
        self._in_flight: List[Future] = []
        self._creating: Optional[Future] = None
        self._creating_mode: Optional[SubjectMode] = None
        self._retiring: Optional[EstimatorHandle] = None
        self._retiring_estimates: List[Future] = []
        self._disposing: Optional[Future] = None
        self._pending_mode: Optional[SubjectMode] = None
        self._requested_mode: Optional[SubjectMode] = None
        self._listeners: List[StatusListener] = []
        self._closed = False
        self.last_error: Optional[ConstructionFailure] = None

    # --- Consultas ---------------------------------------------------------------
    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def handle(self) -> Optional[EstimatorHandle]:
        return self._handle if self._state is LifecycleState.READY else None

    @property
    def is_transitioning(self) -> bool:
        return self._state in (LifecycleState.CREATING, LifecycleState.DISPOSING)

    def is_ready(self) -> bool:
        return self._state is LifecycleState.READY and self._handle is not None and self._handle.ready

    def is_current(self, generation: int) -> bool:
        """``True`` solo si hay un estimador publicado y es de ``generation``."""

        return self.is_ready() and self._handle is not None and self._handle.generation == generation

    def check_current(self, generation: int) -> None:
        if not self.is_current(generation):
            raise StaleResult(
                f"Result from generation {generation} is stale (current: {self._generation}, state: {self._state.value})"
            )

    def _target_mode(self) -> Optional[SubjectMode]:
        if self._state is LifecycleState.READY and self._handle is not None:
            return self._handle.mode
        if self._state is LifecycleState.CREATING:
            return self._pending_mode or self._creating_mode
        if self._state is LifecycleState.DISPOSING:
            return self._pending_mode
        return None

    def status(self) -> LifecycleStatus:
        handle = self.handle
        return LifecycleStatus(
            state=self._state,
            mode=handle.mode if handle is not None else None,
            target=self._target_mode(),
            generation=self._generation,
            error=str(self.last_error) if self.last_error is not None else None,
        )

    def add_listener(self, listener: StatusListener) -> None:
        """Registra un *callback* invocado con el ``LifecycleStatus`` tras cada transición."""

        self._listeners.append(listener)

    def _notify(self) -> None:
        status = self.status()
        for listener in list(self._listeners):
            try:
                listener(status)
            except Exception:
                logger.exception("Lifecycle listener %r failed", listener)

    # --- Peticiones ----------------------------------------------------------------
    def request_mode(self, mode: SubjectMode | str) -> None:
        """Pide que el estimador publicado pase a ``mode``.

        Las peticiones que llegan durante una transición se agrupan en un único
        modo pendiente: gana la última."""

        if self._closed:
            raise RuntimeError("EstimatorLifecycle is closed")
        target = as_mode(mode)
        self._requested_mode = target

        if self._state is LifecycleState.IDLE:
            self._start_creation(target)
        elif self._state is LifecycleState.READY:
            if self._handle is not None and self._handle.mode is target:
                return
            logger.info("Switching pose estimator to %s mode", target.value)
            self._pending_mode = target
            self._retire_current()
        elif self._state is LifecycleState.CREATING:
            self._pending_mode = None if target is self._creating_mode else target
            logger.debug("Mode %s queued while creating %s", target.value, self._creating_mode)
        else:
            self._pending_mode = target
            logger.debug("Mode %s queued while disposing", target.value)

    def retry(self) -> bool:
        """Reintenta manualmente tras un fallo de construcción."""

        if self._state is not LifecycleState.IDLE or self._requested_mode is None:
            return False
        self.request_mode(self._requested_mode)
        return True

    def submit_estimate(self, image_bgr: np.ndarray) -> PendingEstimate:
        """Despacha una inferencia sobre el estimador publicado."""

        if not self.is_ready() or self._handle is None:
            raise RuntimeError(f"No estimator ready (state: {self._state.value})")
        handle = self._handle
        future = self._executor.submit(handle.estimator.estimate, image_bgr)
        self._in_flight = [f for f in self._in_flight if not f.done()]
        self._in_flight.append(future)
        return PendingEstimate(generation=handle.generation, future=future)

    # --- Avance de la máquina de estados ------------------------------------------
    def poll(self) -> LifecycleState:
        """Procesa los trabajos terminados; se llama en cada tick."""

        while not self._closed and self._step():
            pass
        return self._state

    def _step(self) -> bool:
        if self._state is LifecycleState.CREATING:
            if self._creating is not None and self._creating.done():
                self._finish_creation()
                return True
            return False
        if self._state is LifecycleState.DISPOSING:
            if self._disposing is None:
                if all(f.done() for f in self._retiring_estimates):
                    self._retiring_estimates = []
                    self._disposing = self._executor.submit(_dispose, self._retiring)
                    return True
                return False
            if self._disposing.done():
                self._finish_disposal()
                return True
        return False

    def _start_creation(self, mode: SubjectMode) -> None:
        self._generation += 1
        self._creating_mode = mode
        self._state = LifecycleState.CREATING
        logger.info("Creating %s pose estimator (generation %d)", mode.value, self._generation)
        self._creating = self._executor.submit(self._factory, mode)
        self._notify()

    def _finish_creation(self) -> None:
        future, mode = self._creating, self._creating_mode
        self._creating = None
        self._creating_mode = None
        pending, self._pending_mode = self._pending_mode, None
        try:
            estimator = future.result()
        except Exception as exc:
            failure = ConstructionFailure(f"Could not build {mode.value} pose estimator: {exc}")
            failure.__cause__ = exc
            self.last_error = failure
            logger.error("Pose estimator construction failed for %s mode", mode.value, exc_info=exc)
            self._state = LifecycleState.IDLE
            if pending is not None and pending is not mode:
                self._start_creation(pending)
            else:
                self._notify()
            return

        self.last_error = None
        self._handle = EstimatorHandle(estimator=estimator, mode=mode, generation=self._generation)
        if pending is not None and pending is not mode:
            logger.info("Discarding fresh %s estimator, %s was requested meanwhile", mode.value, pending.value)
            self._pending_mode = pending
            self._retire_current()
            return
        self._handle.ready = True
        self._state = LifecycleState.READY
        logger.info("Pose estimator ready: %s mode (generation %d)", mode.value, self._generation)
        self._notify()

    def _retire_current(self) -> None:
        handle = self._handle
        self._handle = None
        if handle is not None:
            handle.ready = False
        self._retiring = handle
        self._retiring_estimates = [f for f in self._in_flight if not f.done()]
        self._in_flight = []
        self._disposing = None
        self._state = LifecycleState.DISPOSING
        self._notify()

    def _finish_disposal(self) -> None:
        retired = self._retiring
        self._retiring = None
        self._disposing = None
        if retired is not None:
            logger.info("Disposed %s estimator (generation %d)", retired.mode.value, retired.generation)
        target, self._pending_mode = self._pending_mode, None
        if target is not None:
            self._start_creation(target)
        else:
            self._state = LifecycleState.IDLE
            self._notify()

    # --- Cierre --------------------------------------------------------------------
    def close(self, *, wait: bool = False) -> None:
        """Libera todo lo que exista, incluido un estimador aún en construcción.

        Igual que en ``DISPOSING``, un estimador sólo se libera cuando han
        terminado sus inferencias en curso, sea cual sea el ejecutor."""

        if self._closed:
            return
        self._closed = True
        if self._handle is not None:
            self._handle.ready = False
            self._dispose_when_drained(self._handle, self._in_flight)
        if self._retiring is not None and self._disposing is None:
            self._dispose_when_drained(self._retiring, self._retiring_estimates)
        if self._creating is not None:
            mode, generation = self._creating_mode, self._generation
            self._creating.add_done_callback(lambda fut: self._dispose_orphan(fut, mode, generation))
        self._handle = None
        self._retiring = None
        self._creating = None
        self._in_flight = []
        self._retiring_estimates = []
        self._pending_mode = None
        self._state = LifecycleState.IDLE
        if self._owns_executor:
            self._executor.shutdown(wait=wait)
        logger.info("Estimator lifecycle closed")

    def _dispose_when_drained(self, handle: EstimatorHandle, estimates: List[Future]) -> None:
        pending = [f for f in estimates if not f.done()]
        if not pending:
            self._executor.submit(_dispose, handle)
            return
        # El último ``Future`` en terminar libera el estimador desde su propio hilo.
        lock = threading.Lock()
        remaining = [len(pending)]

        def _on_done(_future: Future) -> None:
            with lock:
                remaining[0] -= 1
                last = remaining[0] == 0
            if last:
                _dispose(handle)

        for future in pending:
            future.add_done_callback(_on_done)

    @staticmethod
    def _dispose_orphan(future: Future, mode: Optional[SubjectMode], generation: int) -> None:
        if future.cancelled() or future.exception() is not None:
            return
        _dispose(EstimatorHandle(estimator=future.result(), mode=mode or SubjectMode.SINGLE, generation=generation))

    def __enter__(self) -> "EstimatorLifecycle":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

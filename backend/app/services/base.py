# backend/app/services/base.py
"""
Base Service Pattern for the PetBnB search backend

Provides common functionality for all service classes including:
- Session handling
- Logging
- Performance monitoring
"""

from contextlib import contextmanager
from functools import wraps
import logging
import time
from typing import Any, Callable, Dict, Iterator, TypeVar, cast

from sqlalchemy.orm import Session

from ..monitoring.prometheus_metrics import prometheus_metrics

logger = logging.getLogger(__name__)

SLOW_OPERATION_SECONDS = 1.0

F = TypeVar("F", bound=Callable[..., Any])


class BaseService:
    """
    Base class for all service layer components.

    Provides common patterns for:
    - Database session management
    - Logging
    - Performance monitoring
    """

    def __init__(self, db: Session):
        """
        Initialize base service.

        Args:
            db: Database session
        """
        self.db = db
        self.logger = logging.getLogger(self.__class__.__name__)
        self._metrics: Dict[str, Dict[str, float]] = {}

    @staticmethod
    def measure_operation(operation_name: str) -> Callable[[F], F]:
        """
        Decorator to measure operation performance.

        Usage:
            @BaseService.measure_operation("search")
            def search(self, query):
                ...

        Args:
            operation_name: Name of the operation for metrics

        Returns:
            Decorator function
        """

        def decorator(func: F) -> F:
            @wraps(func)
            def wrapper(self, *args, **kwargs):
                with self.measure_operation_context(operation_name):
                    return func(self, *args, **kwargs)

            return cast(F, wrapper)

        return decorator

    @contextmanager
    def measure_operation_context(self, operation_name: str) -> Iterator[None]:
        """
        Context manager to measure operation performance.

        Usage:
            with self.measure_operation_context("complex_operation"):
                # Do work here
                pass

        Args:
            operation_name: Name of the operation for metrics
        """
        start_time = time.perf_counter()
        success = False
        error_type = None

        try:
            yield
            success = True
        except Exception as e:
            error_type = type(e).__name__
            raise
        finally:
            elapsed = time.perf_counter() - start_time
            self._record_metric(operation_name, elapsed, success)

            # Only log if it's actually slow
            if elapsed > SLOW_OPERATION_SECONDS:
                self.logger.warning(
                    f"Slow operation detected: {operation_name} took {elapsed:.2f}s"
                )

            prometheus_metrics.record_service_operation(
                service=self.__class__.__name__,
                operation=operation_name,
                duration=elapsed,
                status="success" if success else "error",
                error_type=error_type,
            )

    def _record_metric(self, operation: str, elapsed: float, success: bool) -> None:
        metric = self._metrics.setdefault(
            operation, {"count": 0, "total_time": 0.0, "success_count": 0, "failure_count": 0}
        )
        metric["count"] += 1
        metric["total_time"] += elapsed
        if success:
            metric["success_count"] += 1
        else:
            metric["failure_count"] += 1

    def get_metrics(self) -> Dict[str, Dict[str, float]]:
        """
        Per-operation counters for this service instance.

        Returns:
            Mapping of operation name to count, total/avg time and outcomes
        """
        result = {}
        for operation, metric in self._metrics.items():
            count = metric["count"] or 1
            result[operation] = {
                **metric,
                "avg_time": metric["total_time"] / count,
                "success_rate": metric["success_count"] / count,
            }
        return result

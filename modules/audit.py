"""
PrivateLink audit driver.

Runs every registered resource validator for one cluster and collects the
results in a ValidationReporter.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence, Tuple

from tenacity import Retrying, before_sleep_log, retry_if_exception, stop_after_attempt, wait_exponential

from lib.constants import AUDIT_DEFAULT_RETRIES, AUDIT_MAX_WORKERS, AUDIT_RETRY_MAX_WAIT, LOGGER_NAME
from lib.exceptions import FailureKind, ResourceValidationError, UpstreamError

from .preflight import ResourceValidator, ValidationOutcome, ValidationReporter
from .preflight.reporter import STATUS_FAILED, STATUS_NOT_APPLICABLE, STATUS_PASSED

logger = logging.getLogger(LOGGER_NAME)


def _is_retryable_upstream(exception: BaseException) -> bool:
    return isinstance(exception, UpstreamError) and exception.retryable


class PrivateLinkAudit:
    """Coordinates PrivateLink resource validators for a cluster."""

    def __init__(
        self,
        validators: Sequence[ResourceValidator],
        parallel: bool = False,
        retries: int = AUDIT_DEFAULT_RETRIES,
        retry_wait_max: float = AUDIT_RETRY_MAX_WAIT,
        max_workers: int = AUDIT_MAX_WORKERS,
    ) -> None:
        self.validators = list(validators)
        self.parallel = parallel
        self.retries = retries
        self.retry_wait_max = retry_wait_max
        self.max_workers = max_workers

        self.reporter = ValidationReporter()

    def _validate(self, validator: ResourceValidator) -> ValidationOutcome:
        """Run one validator, retrying the whole check on retryable upstream failures."""
        retrying = Retrying(
            retry=retry_if_exception(_is_retryable_upstream),
            wait=wait_exponential(multiplier=1, min=0, max=self.retry_wait_max),
            stop=stop_after_attempt(self.retries + 1),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return retrying(validator.validate)

    def _run_one(self, validator: ResourceValidator) -> Tuple[str, Optional[FailureKind], str]:
        """Return (status, failure kind, message) for a single validator."""
        try:
            outcome = self._validate(validator)
        except ResourceValidationError as e:
            return STATUS_FAILED, e.kind, str(e)
        except UpstreamError as e:
            return STATUS_FAILED, FailureKind.UPSTREAM, str(e)
        except Exception as e:
            logger.debug("Unexpected error from %s", validator.filter_value(), exc_info=True)
            return STATUS_FAILED, FailureKind.UPSTREAM, f"unexpected error: {e}"

        if outcome is ValidationOutcome.NOT_APPLICABLE:
            return STATUS_NOT_APPLICABLE, None, "not applicable to this cluster"
        return STATUS_PASSED, None, "validated"

    def run(self) -> Tuple[bool, List[Dict[str, object]]]:
        """Run all validators and return pass/fail with the collected results."""
        logger.info("Starting PrivateLink audit (%d check(s))...", len(self.validators))
        self.reporter = ValidationReporter()

        if self.parallel and len(self.validators) > 1:
            workers = min(self.max_workers, len(self.validators))
            executor = ThreadPoolExecutor(max_workers=workers)
            try:
                outcomes = list(executor.map(self._run_one, self.validators))
            except KeyboardInterrupt:
                # Drop queued checks instead of waiting for them on Ctrl-C
                executor.shutdown(wait=False, cancel_futures=True)
                raise
            executor.shutdown(wait=True)
        else:
            outcomes = [self._run_one(v) for v in self.validators]

        # Recorded in registry order regardless of completion order
        for validator, (status, kind, message) in zip(self.validators, outcomes):
            self.reporter.add_result(validator.filter_value(), status, message, kind=kind)

        self.reporter.print_summary()

        return not self.reporter.failures(), self.reporter.results

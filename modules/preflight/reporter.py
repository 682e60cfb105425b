"""Validation result reporting for PrivateLink audits."""

import json
import logging
from typing import Any, Dict, List, Optional

from lib.constants import LOGGER_NAME
from lib.exceptions import FailureKind

logger = logging.getLogger(LOGGER_NAME)

STATUS_PASSED = "passed"
STATUS_NOT_APPLICABLE = "not_applicable"
STATUS_FAILED = "failed"


class ValidationReporter:
    """Collects validation results and handles summary logging."""

    def __init__(self) -> None:
        self.results: List[Dict[str, Any]] = []

    def add_result(
        self,
        check: str,
        status: str,
        message: str,
        kind: Optional[FailureKind] = None,
    ) -> None:
        """Add a validation result.

        Args:
            check: Name of the validation check
            status: One of STATUS_PASSED, STATUS_NOT_APPLICABLE, STATUS_FAILED
            message: Descriptive message about the result
            kind: Failure kind for failed checks
        """
        passed = status != STATUS_FAILED
        self.results.append(
            {
                "check": check,
                "status": status,
                "passed": passed,
                "message": message,
                "kind": kind.value if kind else None,
            }
        )

        if status == STATUS_PASSED:
            logger.info(f"✓ {check}: {message}")
        elif status == STATUS_NOT_APPLICABLE:
            logger.info(f"– {check}: {message}")
        else:
            logger.error(f"✗ {check} [{kind.value if kind else 'Error'}]: {message}")

    def failures(self) -> List[Dict[str, Any]]:
        """Get list of failed validations."""
        return [r for r in self.results if not r["passed"]]

    def failures_by_kind(self, kind: FailureKind) -> List[Dict[str, Any]]:
        """Get failed results of one failure kind."""
        return [r for r in self.results if not r["passed"] and r["kind"] == kind.value]

    def to_json(self) -> str:
        return json.dumps({"results": self.results}, indent=2)

    def print_summary(self) -> None:
        """Print validation summary to the log."""
        passed = sum(1 for r in self.results if r["status"] == STATUS_PASSED)
        not_applicable = sum(1 for r in self.results if r["status"] == STATUS_NOT_APPLICABLE)
        total = len(self.results)
        failed = self.failures()

        logger.info("\n" + "=" * 60)
        logger.info(f"Validation Summary: {passed}/{total} checks passed, {not_applicable} not applicable")

        if failed:
            logger.error(f"{len(failed)} validation(s) failed!")
            logger.info("\nFailed checks:")
            for result in failed:
                logger.error(f"  ✗ {result['check']} [{result['kind']}]: {result['message']}")
            if self.failures_by_kind(FailureKind.UPSTREAM):
                logger.info("Upstream failures may be transient; re-run the audit to retry.")
        else:
            logger.info("All validations passed!")

        logger.info("=" * 60 + "\n")

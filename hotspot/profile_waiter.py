from __future__ import annotations
from typing import Callable, Optional
import logging
import time

from .errors import NoProfileFound
from .models import ConnectionProfile, RetryBudget
from .platform import HotspotPlatform

log = logging.getLogger(__name__)


class ConnectionProfileWaiter:
    """Polls until Windows reports an internet connection profile."""

    def __init__(
        self,
        platform: HotspotPlatform,
        budget: Optional[RetryBudget] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.platform = platform
        self.budget = budget or RetryBudget()
        self.sleep = sleep
        # Polls made by the last call; more than one means it had to wait.
        self.attempts = 0

    def wait_for_internet_profile(self, budget: Optional[RetryBudget] = None) -> ConnectionProfile:
        budget = budget or self.budget
        for attempt in range(1, budget.max_attempts + 1):
            self.attempts = attempt
            profile = self.platform.get_internet_connection_profile()
            if profile is not None:
                if attempt > 1:
                    log.info("Internet connection profile %r available after %d attempt(s)", profile.name, attempt)
                return profile

            log.info(
                "No internet connection profile yet (attempt %d/%d)", attempt, budget.max_attempts
            )
            if attempt < budget.max_attempts:
                self.sleep(budget.interval)

        raise NoProfileFound(budget.max_attempts)

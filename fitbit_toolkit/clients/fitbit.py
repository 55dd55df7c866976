"""Fitbit Web API client."""

import logging

from fitbit_toolkit.clients.base import BaseClient
from fitbit_toolkit.models import ActivitySummary, UserProfile

logger = logging.getLogger(__name__)


class FitbitClient(BaseClient):
    """Read-only accessors for the Fitbit Web API."""

    def activity_summary_for_day(self, day: str) -> ActivitySummary:
        """Get the activity summary for ``day`` (yyyy-MM-dd).

        The date is passed through as given; the API rejects malformed
        dates with an error status.
        """
        request = self.new_request("GET", f"/user/-/activities/date/{day}.json")
        summary = self.do(request, ActivitySummary)
        logger.info(f"Retrieved activity summary for {day}")
        return summary

    def user_profile(self) -> UserProfile:
        """Get the profile of the authorized user."""
        request = self.new_request("GET", "/user/-/profile.json")
        profile = self.do(request, UserProfile)
        logger.info("Retrieved user profile")
        return profile

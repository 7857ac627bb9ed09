from django.conf import settings
from rest_framework.throttling import AnonRateThrottle


class StringsRateThrottle(AnonRateThrottle):
    """
    Per-IP limit on the strings endpoints, read from STRINGS_RATE_LIMIT
    (e.g. "100/min"). A value of None disables throttling.
    """
    scope = 'strings'

    def get_rate(self):
        return getattr(settings, 'STRINGS_RATE_LIMIT', None)

from wanderplan.utils.helpers import host, time_taken, truncate

__all__ = ["host", "time_taken", "truncate"]

from .user import UserRecord, UserStore
from .rate_counters import LoginAttemptCounter, IpRequestCounter

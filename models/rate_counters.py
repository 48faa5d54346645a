from dataclasses import dataclass


@dataclass
class LoginAttemptCounter:
    # Failed logins for one identifier inside the current window
    count: int = 0
    window_reset_at: float = 0.0

    # Attempts past the gate whose outcome is not recorded yet
    pending: int = 0


@dataclass
class IpRequestCounter:
    count: int = 0
    window_reset_at: float = 0.0

    # Set once the block warning for this window has been logged
    warned: bool = False

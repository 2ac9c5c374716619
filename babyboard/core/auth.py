from __future__ import annotations


class AccessGate:
    """Authorise admin operations against the shared family PIN.

    A plain equality check: the PIN is a low-value shared secret, not a
    credential worth timing-attack hardening.
    """

    header = "X-Admin-Pin"

    def __init__(self, secret: str) -> None:
        self.secret = secret

    def authorize(self, supplied: str | None) -> bool:
        if not supplied or not self.secret:
            return False
        return supplied == self.secret

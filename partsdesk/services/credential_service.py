# partsdesk/services/credential_service.py
import hmac
from typing import Mapping, Optional

import bcrypt

from partsdesk.logger import get_logger

logger = get_logger(__name__)


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    '''Hash a password using bcrypt'''
    salt = bcrypt.gensalt(rounds) if rounds else bcrypt.gensalt()
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


class CredentialService:
    """
    Single-credential login check.

    The credential (account + bcrypt hash) is injected from application config;
    nothing is persisted and no session or token is issued here.
    Unknown account and wrong password fail with the same ValueError.
    """

    def __init__(self, account: str, password_hash: str):
        if not account or not password_hash:
            raise ValueError("Account and password hash are required")
        self.account = account
        self.password_hash = password_hash
        # compared against when the account is unknown, same cost factor as the real hash
        self._dummy_hash = hash_password("partsdesk-dummy", rounds=self._cost_factor(password_hash))

    @classmethod
    def from_config(cls, config: Mapping) -> "CredentialService":
        """
        Build the service from AUTH_ACCOUNT / AUTH_PASSWORD_HASH.
        A plaintext AUTH_PASSWORD is accepted as a fallback and hashed once.

        :param config: Flask app.config or any mapping
        """
        account = config.get("AUTH_ACCOUNT")
        password_hash = config.get("AUTH_PASSWORD_HASH")

        if not password_hash and config.get("AUTH_PASSWORD"):
            logger.warning("AUTH_PASSWORD_HASH not set, hashing plaintext AUTH_PASSWORD at startup")
            password_hash = hash_password(config["AUTH_PASSWORD"])

        if not account or not password_hash:
            raise RuntimeError("AUTH_ACCOUNT and AUTH_PASSWORD_HASH must be configured")

        return cls(account, password_hash)

    # ======================================================
    # 🔐 Internal helpers
    # ======================================================

    @staticmethod
    def _cost_factor(password_hash: str) -> int:
        # bcrypt hashes look like $2b$12$<salt+digest>
        try:
            return int(password_hash.split("$")[2])
        except (IndexError, ValueError):
            raise ValueError("Password hash is not a bcrypt hash")

    def _verify_password(self, password: str, password_hash: str) -> bool:
        '''verify a password against its hash'''
        return bcrypt.checkpw(
            password.encode("utf-8"),
            password_hash.encode("utf-8"),
        )

    # ======================================================
    # 👤 Authentication
    # ======================================================

    def authenticate(self, *, identifier: str, password: str) -> str:
        """
        Check identifier + password.
        Returns the identifier if successful.

        :param identifier: Submitted account / email
        :type identifier: str
        :param password: Plaintext password
        :type password: str
        """
        known = hmac.compare_digest(
            identifier.encode("utf-8"),
            self.account.encode("utf-8"),
        )

        if not known:
            self._verify_password(password, self._dummy_hash)
            logger.warning("Login rejected")
            raise ValueError("Invalid credentials")

        if not self._verify_password(password, self.password_hash):
            logger.warning("Login rejected")
            raise ValueError("Invalid credentials")

        logger.info("Login accepted for %s", identifier)
        return identifier

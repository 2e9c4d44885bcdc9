# hash_password.py
"""
Print a bcrypt hash for AUTH_PASSWORD_HASH.
Manual maintenance only.

    python hash_password.py            # prompts for the password
"""
import getpass

from partsdesk.services.credential_service import hash_password


def main():
    password = getpass.getpass("Password: ")
    confirm = getpass.getpass("Repeat password: ")
    if not password or password != confirm:
        print("❌ Passwords are empty or do not match")
        raise SystemExit(1)

    print("✅ Add this line to .env:")
    print(f"AUTH_PASSWORD_HASH={hash_password(password)}")


if __name__ == "__main__":
    main()

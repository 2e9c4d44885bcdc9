# run_auth.py
"""
Starts the stateless auth service (POST /api/login, GET /).
"""
import os

from partsdesk.app_factory import create_auth_app


def main():
    app = create_auth_app()

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", 3000))

    print(f"Auth API running on port {port}")
    app.run(host=host, port=port, use_reloader=False)


if __name__ == "__main__":
    main()

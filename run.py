# run.py
"""
Starts the dashboard service (local / intranet).
The auth service has its own launcher, run_auth.py.
"""
import os

from partsdesk.app_factory import create_app
from partsdesk.db.auto_init import auto_init


def main():
    # 1. build the app; fails fast without DATABASE_URL or a credential
    app = create_app()

    # 2. create tables on first start
    auto_init()

    print("DB URI:", app.config["DATABASE_URL"])
    print(app.url_map)

    # 3. launch parameters
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", 5000))
    debug = os.getenv("FLASK_DEBUG", "0") == "1"

    app.run(host=host, port=port, debug=debug, use_reloader=False)


if __name__ == "__main__":
    main()

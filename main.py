"""Local development entrypoint.

Exposes the Flask ``app`` object without shadowing the ``app/`` package.
PORT overrides the listening port (default 3000).
"""

import os

from app import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=int(os.getenv("PORT", "3000")), debug=False)

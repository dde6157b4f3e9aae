# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from gamemarket.app import create_app
from gamemarket.shared.config import load_config


def main() -> None:
    config = load_config()
    app = create_app(config)
    app.run(host=config.host, port=config.port, debug=config.is_local(), use_reloader=False)


if __name__ == "__main__":
    main()

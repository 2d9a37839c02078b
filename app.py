import logging
import os
import socket

from blog_dashboard.logging_config import configure_logging
from blog_dashboard.ui.dash_app import create_dash_app

configure_logging()
logger = logging.getLogger("blog_dashboard.app")

app = create_dash_app(os.getenv("DASHBOARD_CONFIG_ROOT", "config"))
server = app.server


def find_free_port(start_port: int, host: str = "localhost") -> int:
    """Finds an available port starting from start_port."""
    for port in range(start_port, start_port + 100):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            if s.connect_ex((host, port)) != 0:
                return port
    return start_port


if __name__ == "__main__":
    host = os.getenv("HOST", "0.0.0.0")
    preferred_port = int(os.getenv("PORT", "8050"))
    debug = os.getenv("DEBUG", "0") == "1"

    final_port = find_free_port(preferred_port)
    if final_port != preferred_port:
        logger.warning(
            "Preferred port taken, using another",
            extra={"preferred_port": preferred_port, "port": final_port},
        )

    logger.info("Starting dashboard", extra={"host": host, "port": final_port, "debug": debug})
    app.run(host=host, port=final_port, debug=debug)

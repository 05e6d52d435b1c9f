"""Run the matching API with uvicorn."""

import uvicorn

from mentormatch.services.api import build_app


def main() -> None:
    app = build_app()
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")


if __name__ == "__main__":
    main()

from __future__ import annotations

import os

import uvicorn


def main() -> None:
    host = os.getenv("COOLING_SHELTER_SERVICE_HOST", "0.0.0.0")
    port = int(os.getenv("COOLING_SHELTER_SERVICE_PORT", "8001"))
    uvicorn.run("shelter_pipeline.service.app:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()

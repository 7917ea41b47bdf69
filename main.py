"""Entrypoint to run the wardrobe API locally."""

import uvicorn


def main() -> None:
    uvicorn.run("server.api:app", host="127.0.0.1", port=8080, reload=False)


if __name__ == "__main__":
    main()

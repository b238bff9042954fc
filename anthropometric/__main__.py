import logging

import uvicorn

from anthropometric import settings


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run("anthropometric.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()

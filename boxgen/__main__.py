"""Run the API server: python -m boxgen"""
import uvicorn

from .config import HOST, PORT


def main():
    uvicorn.run("boxgen.app:app", host=HOST, port=PORT)


if __name__ == "__main__":
    main()

import sys

import uvicorn


def main():
    # Any argument selects the admin CLI; the HTTP listener is never started then
    if len(sys.argv) > 1:
        from online_library.cli import app as cli_app

        cli_app()
    else:
        from online_library.core.config import settings

        uvicorn.run("online_library.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)


if __name__ == "__main__":
    main()

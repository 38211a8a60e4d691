"""
Main entrypoint for a source checkout: python main.py starts the web server.

Installed packages use the txlens-web script instead (txlens.web:main).
"""

from txlens.web import main

if __name__ == "__main__":
    main()

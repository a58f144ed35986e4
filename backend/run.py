#!/usr/bin/env python3
"""
MapMate Backend - Run Script
This script checks the environment and starts the FastAPI backend server
"""

import sys
import subprocess
import socket
from pathlib import Path
from urllib.parse import urlparse

from mapmate.core.config import Settings, settings

def print_colored(message, color="blue"):
    """Print colored output"""
    colors = {
        "red": "\033[91m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "blue": "\033[94m",
        "reset": "\033[0m"
    }
    print(f"{colors.get(color, '')}{message}{colors['reset']}")

def check_port_open(host, port):
    """Check if a port is open"""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.settimeout(2)
    result = sock.connect_ex((host, port))
    sock.close()
    return result == 0

def report_missing_configuration(config: Settings) -> list[str]:
    """Print and return the required secrets the loaded settings lack"""
    missing = config.missing_secrets()
    if missing:
        print_colored("⚠️  Missing configuration: " + ", ".join(missing), "yellow")
        print("Please add them to a .env file or the environment, e.g.:")
        for name in missing:
            print(f"  {name}=...")
    return missing

def main():
    print_colored("🚀 Starting MapMate Backend...", "blue")

    if not Path("mapmate/main.py").exists():
        print_colored("❌ Error: mapmate/main.py not found. Please run this script from the backend directory.", "red")
        sys.exit(1)

    if report_missing_configuration(settings):
        sys.exit(1)

    if settings.STORAGE_MODE == "mongodb":
        print_colored("🔍 Checking MongoDB connection...", "blue")
        parsed = urlparse(settings.MONGO_URI)
        host = parsed.hostname or "localhost"
        port = parsed.port or 27017
        if parsed.scheme == "mongodb" and not check_port_open(host, port):
            print_colored(f"⚠️  Warning: MongoDB doesn't appear to be running on {host}:{port}", "yellow")
            response = input("Continue anyway? (y/N): ").strip().lower()
            if response != 'y':
                sys.exit(1)

    port = str(settings.PORT)
    print_colored("✅ All checks passed!", "green")
    print(f"📍 Backend will be available at: http://localhost:{port}")
    print(f"📍 API Documentation: http://localhost:{port}/docs")
    print()

    try:
        subprocess.run([
            sys.executable, "-m", "uvicorn",
            "mapmate.main:app",
            "--host", "0.0.0.0",
            "--port", port
        ], check=True)
    except KeyboardInterrupt:
        print_colored("\n👋 Backend server stopped.", "yellow")
    except subprocess.CalledProcessError as e:
        print_colored(f"\n❌ Error starting server: {e}", "red")
        sys.exit(1)

if __name__ == "__main__":
    main()

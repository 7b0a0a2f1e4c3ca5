#!/usr/bin/env python3
"""
Timezone Diff - Web Interface Entry Point

Run this script to start the API server:
    python3 run_tzdiff.py

Then query: http://127.0.0.1:3001/api/timezone-diff/<username>
"""

from flask_app import create_app

app = create_app()

if __name__ == '__main__':
    port = app.extensions['tzdiff_settings'].port

    print("\n" + "="*60)
    print("Timezone Diff API")
    print("="*60)
    print(f"\nServer running at http://localhost:{port}")
    print("\nPress CTRL+C to stop the server\n")

    app.run(debug=True, host='0.0.0.0', port=port)

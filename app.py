#!/usr/bin/env python3
"""
Room Mate Finder Backend Application Runner
"""
import os
from roomfinder import create_app, db
from roomfinder.models import User, Room, RoomLike

app = create_app()

@app.shell_context_processor
def make_shell_context():
    return {
        'db': db,
        'User': User,
        'Room': Room,
        'RoomLike': RoomLike
    }

if __name__ == '__main__':
    port = int(os.getenv('PORT', 5000))
    debug = os.getenv('FLASK_ENV') == 'development'
    app.run(host='0.0.0.0', port=port, debug=debug)

import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Game rules
    STARTING_LIVES = int(os.environ.get('STARTING_LIVES', '7'))
    MIN_PLAYERS = int(os.environ.get('MIN_PLAYERS', '3'))
    # Length of the shareable session id players type in to join
    GAME_ID_LENGTH = int(os.environ.get('GAME_ID_LENGTH', '6'))
    MAX_NAME_LENGTH = int(os.environ.get('MAX_NAME_LENGTH', '24'))
    # Comma-separated list of front-end origins allowed by CORS and Socket.IO
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            'CORS_ORIGINS',
            'http://localhost:5173,http://127.0.0.1:5173,http://localhost:5174,http://127.0.0.1:5174',
        ).split(',')
        if origin.strip()
    ]

import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Fixed listening address; the port is intentionally not read from the environment
    HOST = '0.0.0.0'
    PORT = 3001
    CORS_ALLOWED_ORIGINS = '*'
    # Coins granted to a connection the first time it is seen
    STARTING_BALANCE = 100
    # Percentage of the pot burned on every resolution (floored)
    HOUSE_FEE_PERCENT = 10
    MATCH_ID_LENGTH = 8
    # Coin used for flips. None means a fresh system-random coin.
    COIN = None
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

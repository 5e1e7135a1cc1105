"""
Configuration settings for Unscramble
"""
import os

# Game settings
GAME_CONFIG = {
    'max_words': 10,       # Rounds per session
    'score_increase': 20,  # Points for each correctly unscrambled word
    'debug_mode': False,   # Flask debug mode (should be False in production)
}

# Load from environment variables if present
GAME_CONFIG['debug_mode'] = os.getenv('UNSCRAMBLE_DEBUG', '').lower() == 'true'

# Session cookies are signed with this key; a random key logs players out on restart
SECRET_KEY = os.getenv('UNSCRAMBLE_SECRET_KEY') or os.urandom(24)

LOG_LEVEL = os.getenv('UNSCRAMBLE_LOG_LEVEL', 'INFO').upper()

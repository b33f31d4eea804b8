"""Configuration constants.

Centralizes model names, storage keys and limits used across modules.
"""

# Models
CHAT_MODEL = "gemini-2.5-flash"
TTS_MODEL = "gemini-2.5-flash-preview-tts"
IMAGE_MODEL = "gemini-2.5-flash-image"
VIDEO_ANALYSIS_MODEL = "gemini-3-pro-preview"
VIDEO_GENERATION_MODEL = "veo-3.1-fast-generate-preview"

# Chat generation
CHAT_TEMPERATURE = 0.7
CONTEXT_WINDOW_MESSAGES = 6  # Prior turns sent with each request
CONTEXT_PREVIEW_LENGTH = 500  # Characters per prior turn

# Speech
TTS_VOICE = "Kore"
TTS_SAMPLE_RATE = 24000
TRANSCRIPTION_MIME_TYPE = "audio/wav"

# Video generation
VIDEO_POLL_INTERVAL = 5.0  # Seconds between operation polls
VIDEO_RESOLUTION = "720p"

# Storage keys (values are JSON strings)
USER_KEY = "thinkmate_user"
THEME_KEY = "studybuddy-theme"
HISTORY_KEY = "thinkmate_chat_history"

# History browser
PREVIEW_SUMMARY_LENGTH = 100

# Auth
LOGIN_DELAY = 1.0  # Simulated round-trip in seconds

# Display
APP_NAME = "ThinkMate AI"

"""Global constants and default settings."""

WINDOW_WIDTH = 480
WINDOW_HEIGHT = 640
FPS = 60
WINDOW_TITLE = "Whistly Bird"

# Bird geometry and motion
BIRD_X = 80
BIRD_WIDTH = 34
BIRD_HEIGHT = 24
BIRD_SMOOTHING = 0.15

# Share of the bird's vertical range kept free above and below the pitch band
PITCH_MARGIN = 0.15

# Pipes
PIPE_WIDTH = 52

# Reward tone played when a pipe is passed; bird input is locked meanwhile
TONE_DURATION = 0.45  # seconds
TONE_VOLUME = 0.15
TONE_RELEASE_LEVEL = 0.01

# Microphone capture and spectrum analysis
SAMPLE_RATE = 44100
FFT_SIZE = 4096
NOISE_FLOOR = 80  # peak magnitude on the 0-255 byte scale
FREQUENCY_DECAY = 0.95
SPECTRUM_MIN_DB = -100.0
SPECTRUM_MAX_DB = -30.0
SPECTRUM_SMOOTHING = 0.8

# Difficulty presets (pipe spawn intervals in frames)
DIFFICULTIES = {
    "easiest": 180,  # 3.0 seconds at 60 FPS
    "easy": 150,
    "medium": 120,
    "hard": 90,
    "hardest": 60,
}

# Default settings
DEFAULT_GAP_MULTIPLIER = 3.0  # gap height as multiple of bird height
DEFAULT_MIN_FREQ = 440.0  # A4
DEFAULT_MAX_FREQ = 830.61  # G#5
DEFAULT_PIPE_SPEED = 2.0  # pixels per frame
DEFAULT_GLIDE_SPEED = 1.5  # pixels per frame when not whistling
DEFAULT_DIFFICULTY = "easy"

# Slider ranges for the settings panel
GAP_MULTIPLIER_RANGE = (2.0, 5.0)
PIPE_SPEED_RANGE = (1.0, 4.0)
GLIDE_SPEED_RANGE = (0.5, 3.0)

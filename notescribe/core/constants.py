"""Global constants for notescribe."""

# Pitch names
PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Piano range (MIDI numbers)
PIANO_MIN = 21  # A0
PIANO_MAX = 108  # C8
MIDI_MIN = 0
MIDI_MAX = 127

# Pitch naming
A4_FREQ = 440.0
A4_MIDI = 69
MIN_PITCH_FREQ = 10.0  # Hz, anything at or below is "no pitch"
MAX_CENTS_DEVIATION = 50.0

# Note detection
FRAME_SIZE = 2048
HOP_SIZE = 441  # ~10ms at 44.1kHz
SILENCE_GATE_RATIO = 0.08
SMOOTHING_WINDOW = 3
CLARITY_THRESHOLD = 0.88
MIN_STABLE_FRAMES = 3
MIN_DETECTED_DURATION = 0.07
VELOCITY_SCALE = 90.0
VELOCITY_OFFSET = 30.0
RMS_EPSILON = 1e-6

# Tempo estimation
TEMPO_FRAME_SIZE = 1024
TEMPO_HOP_SIZE = 256
ONSET_HISTORY = 10
ONSET_RISE_RATIO = 1.5
ONSET_LOCAL_RATIO = 1.1
ONSET_MIN_RMS = 0.01
MIN_ONSETS = 10
MIN_IOI_CANDIDATES = 5
MIN_TEMPO = 60
MAX_TEMPO = 180
DEFAULT_TEMPO = 120

# Key estimation
KEY_UNKNOWN = "N/A"

# Time signature
COMMON_TIME = "4/4"
COMPOUND_TIME = "6/8"
DEFAULT_TIME_SIGNATURE = COMMON_TIME
MIN_METER_NOTES = 5
METER_TOLERANCE = 0.2
COMPOUND_BIAS = 1.1

# Pipeline
MAX_DURATION = 60.0
MIN_NOTE_DURATION = 0.12
MERGE_GAP = 0.05

# Fallback content
DEFAULT_KEY = "C Major"
SYNTHETIC_PITCHES = ("C4", "D4", "E4", "F4", "G4", "A4", "B4", "C5")
SYNTHETIC_STEP = 0.5
SYNTHETIC_DUTY = 0.9
SYNTHETIC_VELOCITY = 80
SYNTHETIC_MIN_NOTES = 8
FALLBACK_DURATION = 5.0

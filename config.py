import os

# Project root directory (used for resource paths)
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))

# Silence stop rule defaults
# Tune these per microphone (use scripts/replay_silence.py on a sample recording)
SILENCE_THRESHOLD_RATIO = float(os.getenv('SILENCE_THRESHOLD_RATIO', '2.0'))  # Level <= ratio x noise floor counts as silence (must be >= 1)
SILENCE_DURATION_MS = int(os.getenv('SILENCE_DURATION_MS', '1500'))  # Milliseconds of silence before the rule fires (must be >= 0)
MIN_NOISE_LEVEL = 0.005  # Lowest allowed noise floor (normalized RMS)
READINESS_CHECK_BYTES = 100  # Leading bytes summed to reject zero-filled startup buffers

# Polling driver
STOP_RULE_POLL_INTERVAL = float(os.getenv('STOP_RULE_POLL_INTERVAL', '0.005'))  # Seconds to yield when no chunk is ready (0 = just yield)

# Diagnostic chunk dump (raw chunks read by the driver, written as WAV)
DIAGNOSTIC_DUMP_ENABLED = os.getenv('DIAGNOSTIC_DUMP_ENABLED', 'false').lower() == 'true'
DIAGNOSTIC_DUMP_DIR = os.getenv('DIAGNOSTIC_DUMP_DIR', f'{PROJECT_ROOT}/diagnostics')
DIAGNOSTIC_SAMPLE_RATE = int(os.getenv('DIAGNOSTIC_SAMPLE_RATE', '16000'))
DIAGNOSTIC_CHANNELS = int(os.getenv('DIAGNOSTIC_CHANNELS', '1'))

# WAV replay source
REPLAY_CHUNK_MS = int(os.getenv('REPLAY_CHUNK_MS', '20'))  # Chunk size handed out per pull

# Logging
LOG_OUTPUTS = os.getenv('LOG_OUTPUTS', 'stdout')  # Comma separated: stdout, stderr, file
DEBUG_LOG_OUTPUTS = os.getenv('DEBUG_LOG_OUTPUTS', LOG_OUTPUTS)
LOG_FILE_PATH = os.getenv('LOG_FILE_PATH', 'stop_rules.log')
DEBUG_LOG_FILE_PATH = os.getenv('DEBUG_LOG_FILE_PATH', LOG_FILE_PATH)

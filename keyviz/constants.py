"""Constants and configuration for the keyboard visualizer."""

class VisualizerConstants:
    """Central configuration constants for the visualizer."""

    # Application identity
    APP_NAME = "keyviz"
    APP_AUTHOR = "keyviz"
    LOG_FILE_NAME = "keyviz.log"

    # Session termination
    EXIT_THRESHOLD = 5  # Presses of Esc, Enter or Space that end the session

    # Keyboard geometry
    KEY_PADDING = 2  # Columns added to the label length
    KEY_GAP = 1  # Columns between neighbouring keys
    KEY_HEIGHT = 3
    ROW_PITCH = 4  # Key height plus one blank row

    # Event log
    LOG_LABEL_WIDTH = 7
    TIMESTAMP_FORMAT = "%H:%M:%S"
    SEPARATOR_CHAR = "-"

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

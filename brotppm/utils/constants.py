BREAKOUT_R = 2
BREAKOUT_R2 = BREAKOUT_R * BREAKOUT_R

DEFAULT_MAX_ITERATIONS = 2000
MIN_IMAGE_HEIGHT = 30

DEFAULT_X_BOUNDS = (-2.0, 0.8)
DEFAULT_Y_BOUNDS = (-1.2, 1.2)

SUPPORTED_BIT_DEPTHS = (8, 16)
IN_SET_COLOURS = ("white", "black")

EXEC_SUCCESS = 0
ARG_ERROR = 1
FILE_ERROR = 2
SIZE_ERROR = 3
MEM_ERROR = 4

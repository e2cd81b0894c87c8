VARTYPE = "vartype"
NUM_VARIABLES = "num_variables"
DTYPE = "dtype"
OFFSET = "offset"
LINEAR = "linear"
DENSE = "dense"

COO = "coo"
ROWS = "rows"
COLS = "cols"
BIASES = "biases"

SAMPLES = "samples"

DEFAULT_DTYPE = "float64"

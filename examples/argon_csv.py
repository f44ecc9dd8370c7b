# examples/argon_csv.py
import logging

from molsim.io import read_records, synthesize_records, write_records
from molsim.logging_config import setup_logging
from molsim.recorder import CsvRecorder
from molsim.universe import Universe

setup_logging(logging.INFO)

# Round-trip through the input line format, then write one CSV per particle
write_records("argon.csv", synthesize_records(8))
universe = Universe.from_records(read_records("argon.csv"), numerical=True)

with CsvRecorder("out/argon_") as recorder:
    universe.simulate(5e-13, recorder)

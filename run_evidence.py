import logging

import matplotlib.pyplot as plt

from nis_info import eeg_dir, raw_var, moves
from evidence_fxs import load_eeg_dir, read_events, build_labels, build_steps, movement_events, \
    plot_movement_grid, plot_movement_steps

logging.basicConfig(level=logging.INFO, format='%(asctime)s %(name)s %(levelname)s: %(message)s')

# Every .mat in EEGs/ holds the data after one preprocessing step; the raw
# one holds the whole EEG struct (srate, event, chanlocs, EOG).
variables, names = load_eeg_dir(eeg_dir)
eeg_raw = variables[raw_var]
fs = float(eeg_raw.srate)

events = read_events(eeg_raw)
labels = build_labels(eeg_raw)
step_data = build_steps(variables, eeg_raw.EOG)

for move in moves:
    print('Plotting movement {}' .format(move))
    latencies = movement_events(events, move)

    # One tile per preprocessing step
    plot_movement_grid(step_data, names, fs, labels, latencies, move)

    # One figure per preprocessing step
    plot_movement_steps(step_data, names, fs, labels, latencies)

plt.show()

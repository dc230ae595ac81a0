import os.path as op

study_path = op.dirname(op.abspath(__file__))
eeg_dir = op.join(study_path, 'EEGs')

# Variables saved after each preprocessing step, in pipeline order
steps = ['EEG_raw', 'EEG_Hinf', 'EEG_bp', 'EEG_ASR', 'EEG_CAR', 'EEG_zapline']
raw_var = 'EEG_raw'

# Movements: right/left plantar flexion, right/left knee extension
moves = ['RPF', 'LPF', 'RKE', 'LKE']

# Rows of EEG_raw.event for (window start, movement start, movement end)
move_events = {'RPF': (0, 1, 2), 'LPF': (21, 22, 23), 'RKE': (34, 35, 36), 'LKE': (48, 49, 50)}

n_eeg = 28
eog_labels = ['EOGU', 'EOGD', 'EOGL', 'EOGR']
ref_chans = list(range(n_eeg, n_eeg + len(eog_labels)))

pad = 5.  # s after the end of the movement
plot_defaults = {'scale': 100, 'color': 'k', 'scalecol': 'r'}
grid_shape = (2, 3)

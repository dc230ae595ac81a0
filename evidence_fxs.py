import logging
import os
import os.path as op

import numpy as np
import pandas as pd
import scipy.io as spio
import matplotlib.pyplot as plt

from nis_info import steps, raw_var, move_events, n_eeg, eog_labels, ref_chans, pad, plot_defaults, grid_shape
from stacked_fxs import plot_stacked

logger = logging.getLogger(__name__)


def load_eeg_dir(eeg_dir):
    """Load every .mat file in ``eeg_dir``, oldest first.

    Returns the merged variables and the file names without extension, in
    the same order as the files were saved.
    """
    if not op.isdir(eeg_dir):
        raise FileNotFoundError('EEG directory not found: {}' .format(eeg_dir))
    files = [f for f in os.listdir(eeg_dir) if f.endswith('.mat')]
    if not files:
        raise FileNotFoundError('No .mat files in {}' .format(eeg_dir))
    files = sorted(files, key=lambda f: op.getmtime(op.join(eeg_dir, f)))

    variables = dict()
    for f in files:
        mat = spio.loadmat(op.join(eeg_dir, f), squeeze_me=True, struct_as_record=False)
        variables.update({k: v for k, v in mat.items() if not k.startswith('__')})
        logger.info('Loaded {}' .format(f))
    names = [op.splitext(f)[0] for f in files]
    return variables, names


def read_events(eeg_raw):
    events = [{'latency': float(ev.latency), 'type': str(ev.type), 'code': str(getattr(ev, 'code', ''))}
              for ev in np.atleast_1d(eeg_raw.event)]
    return pd.DataFrame(events, columns=['latency', 'type', 'code'])


def movement_events(events, move):
    rows = list(move_events[move])
    if max(rows) >= len(events):
        raise IndexError('Movement {} needs event {}, only {} events' .format(move, max(rows), len(events)))
    return events['latency'].iloc[rows].to_numpy(dtype=float)


def movement_window(latencies, fs, pad=pad):
    return latencies[0] / fs, latencies[2] / fs + pad


def build_labels(eeg_raw):
    labels = [str(ch.labels) for ch in np.atleast_1d(eeg_raw.chanlocs)]
    return labels[:n_eeg] + eog_labels


def build_steps(variables, eog):
    step_data = list()
    for var in steps:
        if var not in variables:
            raise KeyError('Missing preprocessing step: {}' .format(var))
        data = variables[var].data if var == raw_var else variables[var]
        step_data.append(np.vstack((np.atleast_2d(data), np.atleast_2d(eog))))
    return step_data


def plot_step(ax, data, name, fs, labels, latencies, ref=ref_chans):
    win = movement_window(latencies, fs)
    plot_stacked(data, win=win, fs=fs, labels=labels, ax=ax, ref=ref, **plot_defaults)
    ax.set_title('{}. Window: [{:g} - {:g}]s.' .format(name, latencies[0] / fs, latencies[2] / fs))
    for lat, mark in zip(latencies[1:], ['Start', 'End']):
        ax.axvline(lat / fs, color='r', linewidth=2)
        ax.text(lat / fs, 1., mark, color='r', fontsize=10, fontweight='bold',
                transform=ax.get_xaxis_transform(), ha='center', va='bottom')


def plot_movement_grid(step_data, names, fs, labels, latencies, move, ref=ref_chans):
    fig, axes = plt.subplots(*grid_shape, figsize=(18, 10))
    for ax, data, name in zip(axes.flat, step_data, names):
        plot_step(ax, data, name, fs, labels, latencies, ref=ref)
    fig.suptitle('{} - Window: [{:g}]s' .format(move, (latencies[2] - latencies[0]) / fs))
    return fig


def plot_movement_steps(step_data, names, fs, labels, latencies, ref=ref_chans):
    figs = list()
    for data, name in zip(step_data, names):
        fig, ax = plt.subplots(figsize=(10, 8))
        plot_step(ax, data, name, fs, labels, latencies, ref=ref)
        figs.append(fig)
    return figs

import logging

import mne
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgba

logger = logging.getLogger(__name__)

dim_alpha = 0.1
bar_round = 50


class StackedPlotError(ValueError):
    pass


class MissingParameterError(StackedPlotError):
    pass


class InvalidInputError(StackedPlotError):
    pass


class WindowOutOfRangeError(StackedPlotError):
    pass


class InvalidWindowError(StackedPlotError):
    pass


class UnrecognizedOptionError(StackedPlotError, TypeError):
    pass


def prepare_signal(eeg, fs=None, labels=None):
    """Return ``eeg`` as an MNE Raw object.

    A Raw object is passed through untouched. A bare channels x samples
    matrix (in µV) needs ``fs``; labels default to '1'..'n'.
    """
    if isinstance(eeg, mne.io.BaseRaw):
        return eeg

    data = np.asarray(eeg, dtype=float)
    if data.size == 0:
        raise InvalidInputError('EEG is empty.')
    if data.ndim == 1:
        data = data[np.newaxis, :]
    if data.ndim != 2:
        raise InvalidInputError('EEG data must be channels x samples, got shape {}' .format(data.shape))
    if fs is None:
        raise MissingParameterError('EEG data requires to specify fs.')
    if fs <= 0:
        raise InvalidInputError('fs must be positive, got {}' .format(fs))
    logger.info('Input is EEG data.')

    n_chan = data.shape[0]
    if labels is None:
        logger.info('Labels not found. Generating auto labels.')
        labels = [str(ix + 1) for ix in range(n_chan)]
    else:
        labels = [str(lab) for lab in labels]
        if len(labels) != n_chan:
            raise InvalidInputError('Got {} labels for {} channels' .format(len(labels), n_chan))
        if len(set(labels)) != n_chan:
            raise InvalidInputError('Channel labels must be unique')

    info = mne.create_info(ch_names=labels, sfreq=fs, ch_types='eeg')
    # MNE keeps EEG in volts
    return mne.io.RawArray(data * 1e-6, info, verbose=False)


def recording_bounds(raw):
    return 0., raw.n_times / raw.info['sfreq']


def trim_window(raw, win=None):
    xmin, xmax = recording_bounds(raw)
    if win is None:
        logger.info('Window not specified. Plotting full signal.')
        win = (xmin, xmax)
    else:
        if np.ndim(win) != 1 or len(win) != 2:
            raise InvalidWindowError('Window must be [start, end], got {}' .format(win))
        win = (float(win[0]), float(win[1]))
        if win[1] > xmax:
            raise WindowOutOfRangeError('Invalid window: Upper limit greater than max sampled time.')
        elif win[0] < xmin:
            raise WindowOutOfRangeError('Invalid window: Lower limit lower than min sampled time.')
        elif win[0] > win[1]:
            raise InvalidWindowError('Invalid window: Lower limit greater than upper limit.')

    # the recording ends one sample before xmax
    last = raw.times[-1]
    cropped = raw.copy().crop(tmin=min(win[0], last), tmax=min(win[1], last), include_tmax=True, verbose=False)
    return cropped, win


def offset_step(data, scale=None):
    if scale is not None:
        return -float(scale)
    # range ignoring NaN samples
    rans = np.nanmax(data, axis=1) - np.nanmin(data, axis=1)
    return -float(np.nanmean(rans))


def scale_bar_length(step, scale=None, scalelen=None):
    if scalelen is not None:
        return scalelen
    if scale is not None:
        return scale
    # smallest multiple of 50 not below the mean channel range
    return bar_round * int(np.ceil(abs(step) / bar_round))


def apply_offsets(data, step):
    n_chan = data.shape[0]
    shifted = data + step * np.arange(1, n_chan + 1)[:, np.newaxis]
    return shifted - step * n_chan


def stack_ticks(step, n_chan):
    return abs(step) * np.arange(n_chan)


def _bar_text(length):
    # integers in full, no exponent form
    if float(length).is_integer():
        return '{:d}' .format(int(length))
    return '{:.5g}' .format(length)


def _trace_colors(n_chan, color):
    if color is not None:
        return [color] * n_chan
    palette = plt.rcParams['axes.prop_cycle'].by_key()['color']
    return [palette[ix % len(palette)] for ix in range(n_chan)]


def plot_stacked(eeg, win=None, fs=None, labels=None, ax=None, scale=None, color=None, scalecol=None,
                 scalelen=None, ref=None, lw=1, **kwargs):
    """Plot EEG channels stacked on one axes with a scale bar.

    Parameters
    ----------
    eeg : mne.io.BaseRaw | array, shape (n_channels, n_samples)
        Recording to plot. Bare arrays are taken in µV.
    win : tuple of float | None
        Time window (s) to plot. None plots the full recording.
    fs : float | None
        Sample rate, required when ``eeg`` is an array.
    labels : list of str | None
        Channel labels for array input. Defaults to '1'..'n'.
    ax : matplotlib.axes.Axes | None
        Axes to draw into. A new figure is created if None. Pass the same
        axes twice to overlay two signals.
    scale : float | None
        Fixed channel spacing in µV, also the default scale-bar length.
        Defaults to the mean peak-to-peak range of the channels.
    color : color | None
        Color of every trace. Defaults to the matplotlib color cycle.
    scalecol : color | None
        Scale-bar color, black by default. 'none' hides the bar.
    scalelen : float | None
        Scale-bar length in µV, overriding the one implied by ``scale``.
    ref : list of int | None
        Indices of channels to dim.
    lw : float
        Trace line width.
    """
    if kwargs:
        raise UnrecognizedOptionError('Unrecognized argument: {}' .format(', '.join(sorted(kwargs))))

    raw = prepare_signal(eeg, fs=fs, labels=labels)
    cropped, win = trim_window(raw, win)
    data = cropped.get_data(units='uV')
    n_chan = data.shape[0]

    ref_chans = sorted(set(ref)) if ref is not None else []
    bad_ref = [ix for ix in ref_chans if not 0 <= ix < n_chan]
    if bad_ref:
        raise InvalidInputError('Reference channels out of range: {}' .format(bad_ref))

    step = offset_step(data, scale)
    length = scale_bar_length(step, scale, scalelen)
    data = apply_offsets(data, step)

    if ax is None:
        fig, ax = plt.subplots()

    times = cropped.times + win[0]
    colors = _trace_colors(n_chan, color)
    for ix in range(n_chan):
        if ix not in ref_chans:
            ax.plot(times, data[ix], color=colors[ix], linewidth=lw)
    for ix in ref_chans:
        ax.plot(times, data[ix], color=to_rgba(colors[ix], alpha=dim_alpha), linewidth=lw)

    ax.set_title('Stacked EEG plot. Window: [{:g} - {:g}]s' .format(win[0], win[1]))
    ax.set_xlim(times[0], times[-1])
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Channel')
    v_ticks = stack_ticks(step, n_chan)
    ax.set_yticks(v_ticks)
    ax.set_yticklabels(cropped.ch_names[::-1])
    ax.set_ylim(v_ticks[0] - abs(step), v_ticks[-1] + abs(step))

    bar_col = scalecol if scalecol is not None else 'k'
    base = v_ticks[-2] if n_chan > 1 else v_ticks[-1]
    ax.plot([win[1], win[1]], [base, base + length], linewidth=3, color=bar_col)
    ax.text(win[1] + 0.01 * (win[1] - win[0]), base + length / 2., '{} µV' .format(_bar_text(length)), color=bar_col)

from wavepaddle.structs import PaddleSpectrum


import numpy as np
import plotly.graph_objects as go
import warnings


def plot_paddle_spectrum(spectrum, result: PaddleSpectrum, n_samples: int = 500,
                         show_plot: bool = True, return_fig: bool = False):
    """
    Plot the spectral density, the bin partition, and the paddle stroke of each bin.

    Args:
        spectrum: JonswapSpectrum that was partitioned.
        result: Output of `compute_paddle_spectrum` for that spectrum.
        n_samples: Number of points on the density curve (default: 500).
        show_plot: Whether to display the plot (default: True).
        return_fig: Whether to return the figure object (default: False).

    Returns:
        Plotly figure object if return_fig=True, otherwise None.
    """
    fig = go.Figure()

    wmax = spectrum.wmax
    w = np.linspace(wmax / n_samples, wmax, n_samples)
    S = spectrum.density(w)

    fig.add_trace(go.Scatter(
        x=w,
        y=S,
        mode='lines',
        line=dict(color='#348ABD', width=2),
        name='S(w)'
    ))

    # Bin edges as one broken line trace, None separates the segments
    s_top = float(np.max(S)) * 1.05
    edge_x = []
    edge_y = []
    for b in result.bins.boundaries:
        edge_x.extend([b, b, None])
        edge_y.extend([0.0, s_top, None])

    fig.add_trace(go.Scatter(
        x=edge_x,
        y=edge_y,
        mode='lines',
        line=dict(color='gray', width=1, dash='dot'),
        name='Bin edges'
    ))

    fig.add_trace(go.Bar(
        x=result.bins.centers,
        y=result.paddle_amplitudes,
        width=result.bins.widths,
        marker=dict(color='#A60628'),
        opacity=0.4,
        yaxis='y2',
        name=f'{result.kind} stroke'
    ))

    fig.update_layout(
        xaxis=dict(title='w [rad/s]', range=[0.0, wmax]),
        yaxis=dict(title='S(w) [m^2 s]'),
        yaxis2=dict(title='Stroke amplitude [m]', overlaying='y', side='right'),
        bargap=0.0,
        legend=dict(x=0.7, y=0.95)
    )

    if show_plot:
        try:
            fig.show(renderer="browser")
        except Exception:
            # Fallback for headless environments
            try:
                fig.show(renderer="png")
            except Exception as e:
                warnings.warn(f"Could not display spectrum plot: {e}")

    if return_fig:
        return fig
    else:
        return None

"""
Interactive Plots Module

This module creates interactive visualizations for a simulated solar day
using Plotly: the sun path, incidence and efficiency on the panel, the
power generation curve, and the multi-year cash flow.

References:
- Plotly Python documentation
- Sun path diagrams, Duffie & Beckman, Solar Engineering of Thermal Processes
"""

from typing import Dict, List

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from ..simulation.report import SimulationReport


class InteractivePlots:
    """
    Interactive visualization toolkit for daily solar yield analysis.

    Features:
    - Sun path in altitude/azimuth and polar form
    - Incidence angle and geometric efficiency over the day
    - Power, radiation and panel temperature curves
    - Cash flow projection
    - Multi-scenario comparison
    - HTML and image export
    """

    def __init__(self, theme: str = "plotly_white"):
        """
        Initialize interactive plots

        Args:
            theme: Plotly theme for styling
        """
        self.theme = theme
        self.color_palette = px.colors.qualitative.Set1
        self.series_colors = {
            'sun': '#f59e0b',
            'power': '#2563eb',
            'radiation': '#dc2626',
            'temperature': '#7c3aed',
            'efficiency': '#059669',
            'cash_flow': '#0f766e'
        }

    def _frame(self, report: SimulationReport) -> pd.DataFrame:
        return pd.DataFrame(report.rows())

    def _empty_figure(self, title: str) -> go.Figure:
        fig = go.Figure()
        fig.update_layout(
            title=title,
            template=self.theme,
            annotations=[dict(text="No solar trajectory for this date", showarrow=False,
                              xref="paper", yref="paper", x=0.5, y=0.5)]
        )
        return fig

    def plot_sun_path(self, report: SimulationReport, title: str = "Sun Path") -> go.Figure:
        """
        Sun altitude against azimuth, with a polar sky view

        Args:
            report: Simulation report
            title: Plot title

        Returns:
            Plotly figure object
        """
        if not report.has_data:
            return self._empty_figure(title)

        df = self._frame(report)
        fig = make_subplots(
            rows=1, cols=2,
            subplot_titles=('Altitude vs Azimuth', 'Sky View'),
            specs=[[{"type": "xy"}, {"type": "polar"}]]
        )

        fig.add_trace(
            go.Scatter(
                x=df['azimuth_deg'],
                y=df['altitude_deg'],
                mode='lines+markers',
                name='Sun path',
                text=df['solar_time'],
                line=dict(color=self.series_colors['sun'], width=2),
                hovertemplate='Time: %{text}<br>Azimuth: %{x:.1f}°<br>Altitude: %{y:.1f}°<extra></extra>'
            ),
            row=1, col=1
        )

        # Polar radius is the zenith angle so the horizon sits on the outer ring
        fig.add_trace(
            go.Scatterpolar(
                r=90.0 - df['altitude_deg'],
                theta=df['azimuth_deg'],
                mode='lines+markers',
                name='Sky view',
                text=df['solar_time'],
                line=dict(color=self.series_colors['sun']),
                showlegend=False,
                hovertemplate='Time: %{text}<br>Zenith: %{r:.1f}°<extra></extra>'
            ),
            row=1, col=2
        )

        fig.update_layout(
            title=title,
            template=self.theme,
            polar=dict(
                radialaxis=dict(range=[0, 90]),
                angularaxis=dict(rotation=90, direction='clockwise')
            )
        )
        fig.update_xaxes(title_text="Azimuth (°, 0=N clockwise)", row=1, col=1)
        fig.update_yaxes(title_text="Altitude (°)", row=1, col=1)

        return fig

    def plot_incidence(self, report: SimulationReport,
                       title: str = "Incidence and Geometric Efficiency") -> go.Figure:
        if not report.has_data:
            return self._empty_figure(title)

        df = self._frame(report)
        fig = make_subplots(specs=[[{"secondary_y": True}]])
        fig.add_trace(
            go.Scatter(x=df['solar_time'], y=df['incidence_angle_deg'], mode='lines',
                       name='Incidence θ (°)', line=dict(color=self.series_colors['sun'])),
            secondary_y=False
        )
        fig.add_trace(
            go.Scatter(x=df['solar_time'], y=df['efficiency_pct'], mode='lines',
                       name='Efficiency η (%)', line=dict(color=self.series_colors['efficiency'])),
            secondary_y=True
        )
        fig.update_layout(title=title, template=self.theme)
        fig.update_xaxes(title_text="Solar time")
        fig.update_yaxes(title_text="Incidence (°)", secondary_y=False)
        fig.update_yaxes(title_text="Efficiency (%)", range=[0, 100], secondary_y=True)
        return fig

    def plot_power_curve(self, report: SimulationReport,
                         title: str = "Power Generation Curve") -> go.Figure:
        """
        Power output, incident radiation and panel temperature over the day

        Args:
            report: Simulation report
            title: Plot title

        Returns:
            Plotly figure object
        """
        if not report.has_data:
            return self._empty_figure(title)

        df = self._frame(report)
        fig = make_subplots(
            rows=3, cols=1,
            subplot_titles=('Power Output', 'Incident Radiation', 'Panel Temperature'),
            vertical_spacing=0.08,
            shared_xaxes=True
        )

        fig.add_trace(
            go.Scatter(
                x=df['solar_time'], y=df['power_output_w'],
                mode='lines', fill='tozeroy', name='Power',
                line=dict(color=self.series_colors['power'], width=2),
                hovertemplate='Time: %{x}<br>Power: %{y:.1f} W<extra></extra>'
            ),
            row=1, col=1
        )

        energy = report.energy_dict()
        fig.add_hline(
            y=energy['peak_w'],
            line_dash="dash",
            line_color="gray",
            annotation_text=f"Peak: {energy['peak_w']:.1f} W, {energy['total_kwh']:.2f} kWh/day",
            row=1, col=1
        )

        fig.add_trace(
            go.Scatter(
                x=df['solar_time'], y=df['incident_radiation_wm2'],
                mode='lines', name='Radiation',
                line=dict(color=self.series_colors['radiation'], width=2),
                hovertemplate='Time: %{x}<br>I: %{y:.0f} W/m²<extra></extra>'
            ),
            row=2, col=1
        )

        fig.add_trace(
            go.Scatter(
                x=df['solar_time'], y=df['panel_temp_c'],
                mode='lines', name='Panel temperature',
                line=dict(color=self.series_colors['temperature'], width=2),
                hovertemplate='Time: %{x}<br>Tt: %{y:.1f} °C<extra></extra>'
            ),
            row=3, col=1
        )

        fig.update_layout(title=title, height=900, template=self.theme, showlegend=False)
        fig.update_xaxes(title_text="Solar time", row=3, col=1)
        fig.update_yaxes(title_text="Power (W)", row=1, col=1)
        fig.update_yaxes(title_text="Radiation (W/m²)", row=2, col=1)
        fig.update_yaxes(title_text="Temperature (°C)", row=3, col=1)

        return fig

    def plot_cash_flow(self, report: SimulationReport,
                       title: str = "Financial Projection") -> go.Figure:
        """Yearly savings bars with the accumulated cash flow line"""
        if report.financial is None:
            return self._empty_figure(title)

        df = pd.DataFrame(report.financial_rows())
        fig = make_subplots(specs=[[{"secondary_y": True}]])

        fig.add_trace(
            go.Bar(x=df['year'], y=df['annual_savings'], name='Annual savings',
                   marker_color=self.series_colors['efficiency'],
                   hovertemplate='Year %{x}<br>Savings: $%{y:.2f}<extra></extra>'),
            secondary_y=False
        )
        fig.add_trace(
            go.Scatter(x=df['year'], y=df['accumulated_cash_flow'], mode='lines+markers',
                       name='Accumulated cash flow',
                       line=dict(color=self.series_colors['cash_flow'], width=2),
                       hovertemplate='Year %{x}<br>Cash flow: $%{y:.2f}<extra></extra>'),
            secondary_y=True
        )
        fig.add_hline(y=0, line_dash="dot", line_color="gray", secondary_y=True)

        payback = report.financial.payback_year
        if payback is not None:
            fig.add_vline(x=payback, line_dash="dash", line_color="green",
                          annotation_text=f"Payback: year {payback}")

        fig.update_layout(title=title, template=self.theme)
        fig.update_xaxes(title_text="Year")
        fig.update_yaxes(title_text="Annual savings ($)", secondary_y=False)
        fig.update_yaxes(title_text="Accumulated ($)", secondary_y=True)
        return fig

    def compare_scenarios(self, reports: Dict[str, SimulationReport],
                          title: str = "Scenario Comparison") -> go.Figure:
        """
        Compare power curves and daily energy of several scenarios

        Args:
            reports: Dictionary of scenario name to report
            title: Plot title

        Returns:
            Plotly figure object
        """
        if not reports:
            return go.Figure()

        fig = make_subplots(
            rows=1, cols=2,
            subplot_titles=('Power Output Comparison', 'Daily Energy')
        )

        names: List[str] = []
        energies: List[float] = []
        for i, (name, report) in enumerate(reports.items()):
            color = self.color_palette[i % len(self.color_palette)]
            if report.has_data:
                df = self._frame(report)
                fig.add_trace(
                    go.Scatter(
                        x=df['hour_angle_deg'] / 15.0 + 12.0,
                        y=df['power_output_w'],
                        mode='lines',
                        name=name,
                        line=dict(color=color, width=2),
                        hovertemplate=f'<b>{name}</b><br>' +
                                      'Hour: %{x:.2f}<br>Power: %{y:.1f} W<extra></extra>'
                    ),
                    row=1, col=1
                )
            names.append(name)
            energies.append(report.day.energy.total_kwh if report.has_data else 0.0)

        fig.add_trace(
            go.Bar(x=names, y=energies, name='Daily energy', showlegend=False,
                   marker_color=self.color_palette[:len(names)],
                   hovertemplate='Scenario: %{x}<br>Energy: %{y:.3f} kWh<extra></extra>'),
            row=1, col=2
        )

        fig.update_layout(title=title, height=500, template=self.theme)
        fig.update_xaxes(title_text="Solar time (h)", range=[0, 24], row=1, col=1)
        fig.update_xaxes(title_text="Scenario", row=1, col=2)
        fig.update_yaxes(title_text="Power (W)", row=1, col=1)
        fig.update_yaxes(title_text="Energy (kWh)", row=1, col=2)

        return fig

    def create_dashboard(self, report: SimulationReport,
                         title: str = "Solar Yield Dashboard") -> go.Figure:
        """Four-panel overview of one report"""
        if not report.has_data:
            return self._empty_figure(title)

        df = self._frame(report)
        years = pd.DataFrame(report.financial_rows())
        fig = make_subplots(
            rows=2, cols=2,
            subplot_titles=('Sun Altitude', 'Geometric Efficiency', 'Power Output', 'Cash Flow')
        )

        fig.add_trace(go.Scatter(x=df['solar_time'], y=df['altitude_deg'], mode='lines',
                                 line=dict(color=self.series_colors['sun'])), row=1, col=1)
        fig.add_trace(go.Scatter(x=df['solar_time'], y=df['efficiency_pct'], mode='lines',
                                 line=dict(color=self.series_colors['efficiency'])), row=1, col=2)
        fig.add_trace(go.Scatter(x=df['solar_time'], y=df['power_output_w'], mode='lines',
                                 fill='tozeroy', line=dict(color=self.series_colors['power'])),
                      row=2, col=1)
        if not years.empty:
            fig.add_trace(go.Scatter(x=years['year'], y=years['accumulated_cash_flow'],
                                     mode='lines+markers',
                                     line=dict(color=self.series_colors['cash_flow'])),
                          row=2, col=2)

        fig.update_layout(title=title, height=800, template=self.theme, showlegend=False)
        return fig

    def export_plot(self, fig: go.Figure, filename: str,
                    format: str = "html", width: int = 1200, height: int = 800):
        """
        Export plot to various formats

        Args:
            fig: Plotly figure to export
            filename: Output filename
            format: Export format ("html", "png", "svg", "pdf")
            width: Image width in pixels
            height: Image height in pixels
        """
        if format.lower() == "html":
            fig.write_html(filename, include_plotlyjs='cdn')
        elif format.lower() in ("png", "svg", "pdf"):
            fig.write_image(filename, width=width, height=height, format=format.lower())
        else:
            raise ValueError(f"Unsupported export format: {format}")

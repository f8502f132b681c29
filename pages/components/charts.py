"""Chart components using Plotly for data visualization."""

import plotly.graph_objects as go
import plotly.express as px
import pandas as pd
from macro_tracker.models import MacroTargets


def _empty_figure(text: str = "No logs found"):
    fig = go.Figure()
    fig.add_annotation(
        text=text,
        xref="paper", yref="paper",
        x=0.5, y=0.5, showarrow=False
    )
    return fig


def create_macro_pie_chart(targets: MacroTargets):
    """Create pie chart of macro calorie distribution.

    Args:
        targets: MacroTargets object with protein, carbs, fat in grams

    Returns:
        Plotly figure
    """
    labels = ['Protein', 'Carbs', 'Fat']
    values = [
        targets.protein_g * 4,  # 4 cal/g
        targets.carbs_g * 4,    # 4 cal/g
        targets.fat_g * 9       # 9 cal/g
    ]

    fig = px.pie(
        names=labels,
        values=values,
        title="Macro Calorie Distribution",
        color_discrete_sequence=['#FF6B6B', '#4ECDC4', '#FFE66D']
    )

    fig.update_traces(textposition='inside', textinfo='percent+label')

    return fig


def summaries_to_frame(summaries: list) -> pd.DataFrame:
    """One row per day: eaten, burned and budget."""
    rows = [
        {
            'Date': s.day,
            'Calories': s.totals.calories,
            'Burned': s.totals.calories_burned,
            'Budget': s.calorie_budget,
            'Protein': s.totals.protein_g,
            'Carbs': s.totals.carbs_g,
            'Fat': s.totals.fat_g,
            'Fiber': s.totals.fiber_g,
            'Menstruation': s.is_menstruation,
        }
        for s in summaries
    ]
    return pd.DataFrame(rows, columns=[
        'Date', 'Calories', 'Burned', 'Budget', 'Protein', 'Carbs', 'Fat', 'Fiber', 'Menstruation'
    ])


def create_calorie_trend(summaries: list):
    """Create line chart of daily calories against the day's budget.

    Args:
        summaries: List of DailySummary objects, oldest first

    Returns:
        Plotly figure
    """
    df = summaries_to_frame(summaries)
    if df.empty or (df['Calories'].sum() == 0 and df['Burned'].sum() == 0):
        return _empty_figure()

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=df['Date'], y=df['Calories'], mode='lines+markers', name='Eaten'
    ))
    fig.add_trace(go.Scatter(
        x=df['Date'], y=df['Budget'], mode='lines', name='Budget',
        line={'dash': 'dash'}
    ))
    fig.add_trace(go.Bar(
        x=df['Date'], y=df['Burned'], name='Burned', opacity=0.4
    ))

    fig.update_layout(
        title='Daily Calories',
        xaxis_title="Date",
        yaxis_title="Calories (kcal)",
        hovermode='x unified'
    )

    return fig


def create_macro_stacked_bar(summaries: list, targets: MacroTargets = None):
    """Create stacked bar chart of protein/carbs/fat per day.

    Args:
        summaries: List of DailySummary objects
        targets: Optional MacroTargets for a protein reference line

    Returns:
        Plotly figure
    """
    df = summaries_to_frame(summaries)
    if df.empty or df[['Protein', 'Carbs', 'Fat']].to_numpy().sum() == 0:
        return _empty_figure()

    fig = px.bar(
        df,
        x='Date',
        y=['Protein', 'Carbs', 'Fat'],
        title='Daily Macro Breakdown',
        barmode='stack',
        color_discrete_sequence=['#FF6B6B', '#4ECDC4', '#FFE66D']
    )

    fig.update_layout(
        xaxis_title="Date",
        yaxis_title="Grams",
        hovermode='x unified',
        legend_title="Macros"
    )

    if targets:
        fig.add_hline(
            y=targets.protein_g,
            line_dash="dash",
            annotation_text="Protein Target",
            line_color="red"
        )

    return fig

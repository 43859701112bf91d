"""Calculator page: choose the unknown field, solve it, show the amortization schedule."""

import dash
from dash import html, dcc, callback, ctx, Input, Output, State, no_update
import plotly.graph_objects as go

from loancalc.engine.calculator import (
    editable_fields,
    locked_field,
    parameters_from_fields,
    schedule_for,
    solve,
)
from loancalc.engine.errors import LoanCalcError
from loancalc.engine.formatting import format_amount
from loancalc.models.loan import SolveTarget

dash.register_page(__name__, path="/", name="Calculator")

BTN_STYLE = {
    "padding": "0.6rem 1.5rem",
    "fontSize": "1rem",
    "backgroundColor": "#1a1a2e",
    "color": "white",
    "border": "none",
    "cursor": "pointer",
}

FIELD_STYLE = {"width": "100%", "padding": "0.5rem", "fontSize": "0.95rem"}
ERROR_STYLE = {"color": "red", "padding": "0.5rem 0"}

# Input component id for each LoanParameters field
INPUT_IDS = {
    "capital": "input-capital",
    "repayment": "input-repayment",
    "periods": "input-periods",
    "annual_rate": "input-rate",
}

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


def _field(label, input_id, placeholder):
    return html.Div([
        html.Label(label, style={"fontSize": "0.85rem", "marginBottom": "0.25rem", "display": "block"}),
        dcc.Input(id=input_id, type="text", placeholder=placeholder, debounce=True, style=FIELD_STYLE),
    ], style={"marginBottom": "0.75rem"})


layout = html.Div([
    html.Div([
        html.Label("Compute: ", style={"marginRight": "0.5rem"}),
        dcc.Dropdown(
            id="solve-target",
            options=[{"label": t.label, "value": t.value} for t in SolveTarget],
            value=SolveTarget.CAPITAL.value,
            clearable=False,
            style={"width": "240px"},
        ),
    ], style={"display": "flex", "alignItems": "center", "marginBottom": "1.5rem"}),

    html.Div([
        _field("Capital", INPUT_IDS["capital"], "10000"),
        _field("Repayment", INPUT_IDS["repayment"], "500"),
        _field("Duration (periods)", INPUT_IDS["periods"], "24"),
        _field("Annual rate (%)", INPUT_IDS["annual_rate"], "7.42"),
    ], style={"maxWidth": "360px"}),

    html.Div([
        html.Button("Result", id="result-btn", n_clicks=0, style=BTN_STYLE),
        html.Button("Clear", id="clear-btn", n_clicks=0, style=BTN_STYLE),
        html.Button("Amortization schedule", id="schedule-btn", n_clicks=0, style=BTN_STYLE),
    ], style={"display": "flex", "gap": "0.75rem", "margin": "1rem 0"}),

    html.Div(id="calc-message"),

    html.Div(id="schedule-section", children=[
        html.Div(id="schedule-summary"),
        dcc.Graph(id="balance-chart"),
        html.Pre(id="schedule-report", style={
            "fontFamily": "monospace",
            "backgroundColor": "#f7f7f9",
            "padding": "1rem",
            "maxHeight": "480px",
            "overflow": "auto",
        }),
    ], style={"display": "none"}),
])


# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------


@callback(
    Output(INPUT_IDS["capital"], "disabled"),
    Output(INPUT_IDS["repayment"], "disabled"),
    Output(INPUT_IDS["periods"], "disabled"),
    Output(INPUT_IDS["annual_rate"], "disabled"),
    Input("solve-target", "value"),
)
def lock_computed_field(target_value):
    editable = editable_fields(SolveTarget(target_value))
    return tuple(not editable[name] for name in INPUT_IDS)


@callback(
    Output(INPUT_IDS["capital"], "value"),
    Output(INPUT_IDS["repayment"], "value"),
    Output(INPUT_IDS["periods"], "value"),
    Output(INPUT_IDS["annual_rate"], "value"),
    Output("calc-message", "children"),
    Output("schedule-section", "style"),
    Output("schedule-report", "children"),
    Output("schedule-summary", "children"),
    Output("balance-chart", "figure"),
    Input("result-btn", "n_clicks"),
    Input("clear-btn", "n_clicks"),
    Input("schedule-btn", "n_clicks"),
    State("solve-target", "value"),
    State(INPUT_IDS["capital"], "value"),
    State(INPUT_IDS["repayment"], "value"),
    State(INPUT_IDS["periods"], "value"),
    State(INPUT_IDS["annual_rate"], "value"),
    prevent_initial_call=True,
)
def on_button(_result, _clear, _schedule, target_value, capital, repayment, periods, rate):
    fields = [capital, repayment, periods, rate]
    unchanged = [no_update] * 4
    hidden = {"display": "none"}

    if ctx.triggered_id == "clear-btn":
        return [""] * 4 + ["", hidden, "", "", go.Figure()]

    if ctx.triggered_id == "result-btn":
        return _run_solve(SolveTarget(target_value), fields) + [no_update] * 4

    if ctx.triggered_id == "schedule-btn":
        return unchanged + _run_schedule(fields)

    return unchanged + [no_update] * 5


# ---------------------------------------------------------------------------
# Button handlers
# ---------------------------------------------------------------------------


def _run_solve(target, fields):
    """Returns the four field values followed by the message."""
    computed = list(INPUT_IDS).index(locked_field(target))
    # The computed field is ignored even if it still holds an old value
    fields = list(fields)
    fields[computed] = None
    try:
        solution = solve(target, parameters_from_fields(*fields))
    except LoanCalcError as e:
        return [no_update] * 4 + [html.Div(str(e), style=ERROR_STYLE)]

    values = [no_update] * 4
    values[computed] = solution.display
    message = ""
    if not solution.converged:
        message = html.Div(
            "Rate search did not converge; showing the last estimate.",
            style={"color": "#f39c12", "padding": "0.5rem 0"},
        )
    return values + [message]


def _run_schedule(fields):
    """Returns message, section style, report, summary and chart."""
    try:
        result = schedule_for(parameters_from_fields(*fields))
    except LoanCalcError as e:
        return [
            html.Div(f"Invalid parameters for the amortization schedule. {e}", style=ERROR_STYLE),
            {"display": "none"},
            "",
            "",
            go.Figure(),
        ]

    s = result.summary
    summary = html.Ul([
        html.Li(f"Periods: {s.periods}"),
        html.Li(f"Total interest: {format_amount(s.total_interest)}"),
        html.Li(f"Total paid: {format_amount(s.total_paid)}"),
        html.Li(f"Final balance: {format_amount(s.final_balance)}"),
    ])
    return ["", {"display": "block"}, result.report, summary, _balance_chart(result.rows)]


def _balance_chart(rows):
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=[r.period for r in rows],
        y=[r.remaining for r in rows],
        mode="lines",
        name="Remaining",
        line=dict(color="#1a1a2e", width=3),
    ))
    fig.add_trace(go.Bar(
        x=[r.period for r in rows],
        y=[r.interest for r in rows],
        name="Interest",
        marker_color="#e94560",
    ))
    fig.update_layout(
        title="Remaining Balance",
        xaxis_title="Period",
        yaxis_title="Amount",
        hovermode="x unified",
    )
    return fig

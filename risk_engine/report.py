"""Terminal rendering of assessment outcomes with rich."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from risk_engine.domain.models import AssessmentOutcome, RecommendationPlan, RiskLevel, RiskScore

RISK_STYLES = {
    RiskLevel.LOW: "green",
    RiskLevel.MEDIUM: "yellow",
    RiskLevel.HIGH: "red",
}


def _label(score: RiskScore) -> str:
    return score.disease_type.value.replace("_", " ").title()


def risk_table(outcome: AssessmentOutcome) -> Table:
    table = Table(title=f"Risk Assessment (BMI {outcome.bmi:.1f})")
    table.add_column("Condition", style="cyan")
    table.add_column("Risk", justify="center")
    table.add_column("Confidence", justify="right")
    table.add_column("Risk Factors")

    for score in outcome.risk_scores:
        style = RISK_STYLES[score.risk_level]
        table.add_row(
            _label(score),
            f"[{style}]{score.risk_level.value.upper()}[/{style}]",
            f"{score.confidence_score:.0f}%",
            "\n".join(score.risk_factors) or "-",
        )
    return table


def plan_panel(score: RiskScore, plan: RecommendationPlan) -> Panel:
    fitness = plan.fitness_plan
    diet = plan.diet_plan
    lines = [
        f"[bold]Fitness[/bold] ({fitness.intensity}, {fitness.duration_weeks} weeks)",
        *(f"  - {e.name}: {e.duration}, {e.frequency}" for e in fitness.exercises),
        f"[bold]Diet[/bold] ({diet.calories_target} kcal/day)",
        *(f"  - {m.type}: {', '.join(m.suggestions)}" for m in diet.meals),
        f"[bold]Sleep[/bold]: aim for {plan.sleep_recommendations.target_hours} hours",
        f"[bold]Stress[/bold]: {', '.join(plan.stress_management.techniques[:3])}",
    ]
    return Panel(
        "\n".join(lines),
        title=f"{_label(score)} plan",
        border_style=RISK_STYLES[score.risk_level],
    )


def render_outcome(outcome: AssessmentOutcome, console: Console | None = None) -> None:
    """Print the risk table, then a plan panel for every medium or high risk."""
    console = console or Console()
    console.print(risk_table(outcome))

    elevated = [
        (score, plan)
        for score, plan in zip(outcome.risk_scores, outcome.recommendations, strict=True)
        if score.risk_level >= RiskLevel.MEDIUM
    ]
    if not elevated:
        console.print("No elevated risks detected", style="green")
        return

    for score, plan in elevated:
        console.print(plan_panel(score, plan))

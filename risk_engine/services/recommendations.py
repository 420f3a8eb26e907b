"""
Template-driven recommendation plans.

Plans are selected from fixed tables keyed by (disease type, risk level) and
never generated from the measurements themselves, so every piece of advice
a user can receive is known ahead of time and reviewable.

- fitness: tiered by risk level only
- diet: menu by disease type, calorie target by risk level
- sleep, stress, weekly schedule: one fixed template each

Generators accept either enum members or their string values. An unknown
disease type falls back to the diabetes menu; an unknown risk level raises
`UnknownRiskLevelError` because every scorer output is a valid `RiskLevel`.
"""

from collections.abc import Mapping
from types import MappingProxyType

import structlog

from risk_engine.domain.models import (
    DaySchedule,
    DietPlan,
    DiseaseType,
    Exercise,
    FitnessPlan,
    Meal,
    RecommendationPlan,
    RiskLevel,
    SleepRecommendations,
    StressManagement,
)
from risk_engine.errors import UnknownRiskLevelError

logger = structlog.get_logger(__name__)

EXERCISES_BY_RISK: Mapping[RiskLevel, tuple[Exercise, ...]] = MappingProxyType(
    {
        RiskLevel.LOW: (
            Exercise(
                name="Walking",
                duration="30 minutes",
                frequency="5 days/week",
                description="Brisk walking in the morning or evening",
            ),
            Exercise(
                name="Stretching",
                duration="15 minutes",
                frequency="Daily",
                description="Full body stretching routine",
            ),
            Exercise(
                name="Yoga",
                duration="20 minutes",
                frequency="3 days/week",
                description="Basic yoga poses for flexibility",
            ),
        ),
        RiskLevel.MEDIUM: (
            Exercise(
                name="Brisk Walking",
                duration="45 minutes",
                frequency="5 days/week",
                description="Maintain heart rate at 60-70% max",
            ),
            Exercise(
                name="Cycling",
                duration="30 minutes",
                frequency="3 days/week",
                description="Moderate intensity cycling",
            ),
            Exercise(
                name="Swimming",
                duration="30 minutes",
                frequency="2 days/week",
                description="Low-impact cardio exercise",
            ),
            Exercise(
                name="Strength Training",
                duration="20 minutes",
                frequency="2 days/week",
                description="Light weights or resistance bands",
            ),
        ),
        RiskLevel.HIGH: (
            Exercise(
                name="Walking Program",
                duration="60 minutes",
                frequency="6 days/week",
                description="Start with 20 min, gradually increase",
            ),
            Exercise(
                name="Aqua Aerobics",
                duration="45 minutes",
                frequency="3 days/week",
                description="Low-impact water exercises",
            ),
            Exercise(
                name="Stationary Bike",
                duration="30 minutes",
                frequency="4 days/week",
                description="Start at low resistance",
            ),
            Exercise(
                name="Chair Exercises",
                duration="15 minutes",
                frequency="Daily",
                description="Seated strength exercises",
            ),
            Exercise(
                name="Balance Training",
                duration="10 minutes",
                frequency="Daily",
                description="Prevent falls and improve stability",
            ),
        ),
    }
)

PROGRAM_WEEKS: Mapping[RiskLevel, int] = MappingProxyType(
    {RiskLevel.LOW: 8, RiskLevel.MEDIUM: 12, RiskLevel.HIGH: 16}
)

INTENSITY: Mapping[RiskLevel, str] = MappingProxyType(
    {
        RiskLevel.LOW: "Moderate to vigorous",
        RiskLevel.MEDIUM: "Moderate intensity",
        RiskLevel.HIGH: "Gentle progression - Start slow",
    }
)

CALORIE_TARGETS: Mapping[RiskLevel, int] = MappingProxyType(
    {RiskLevel.LOW: 2000, RiskLevel.MEDIUM: 1800, RiskLevel.HIGH: 1600}
)


def _meal(meal_type: str, suggestions: list[str], notes: str) -> Meal:
    return Meal(type=meal_type, suggestions=suggestions, notes=notes)


MENUS: Mapping[DiseaseType, tuple[Meal, ...]] = MappingProxyType(
    {
        DiseaseType.DIABETES: (
            _meal(
                "Breakfast",
                [
                    "Oatmeal with berries and nuts",
                    "Greek yogurt with seeds",
                    "Whole grain toast with avocado",
                ],
                "Focus on low glycemic index foods",
            ),
            _meal(
                "Lunch",
                [
                    "Grilled chicken salad",
                    "Quinoa bowl with vegetables",
                    "Lentil soup with whole grain bread",
                ],
                "Include lean protein and fiber",
            ),
            _meal(
                "Dinner",
                [
                    "Baked fish with steamed vegetables",
                    "Turkey stir-fry with brown rice",
                    "Chickpea curry with cauliflower rice",
                ],
                "Keep carbs moderate and include protein",
            ),
            _meal(
                "Snacks",
                ["Handful of almonds", "Carrot sticks with hummus", "Apple with peanut butter"],
                "Choose snacks with protein or healthy fats",
            ),
        ),
        DiseaseType.HEART_DISEASE: (
            _meal(
                "Breakfast",
                [
                    "Overnight oats with flaxseeds",
                    "Smoothie with spinach and berries",
                    "Whole grain cereal with almond milk",
                ],
                "Rich in omega-3 and fiber",
            ),
            _meal(
                "Lunch",
                [
                    "Salmon salad with olive oil dressing",
                    "Mediterranean vegetable wrap",
                    "Bean and vegetable soup",
                ],
                "Heart-healthy fats and lean proteins",
            ),
            _meal(
                "Dinner",
                [
                    "Grilled fish with roasted vegetables",
                    "Chicken breast with sweet potato",
                    "Plant-based pasta with tomato sauce",
                ],
                "Low sodium, rich in potassium",
            ),
            _meal(
                "Snacks",
                ["Walnuts", "Dark berries", "Celery with almond butter"],
                "Anti-inflammatory foods",
            ),
        ),
        DiseaseType.HYPERTENSION: (
            _meal(
                "Breakfast",
                [
                    "Banana smoothie with spinach",
                    "Oatmeal with berries",
                    "Whole grain toast with tomato",
                ],
                "High in potassium, low in sodium",
            ),
            _meal(
                "Lunch",
                [
                    "Leafy green salad with grilled chicken",
                    "Vegetable soup (low sodium)",
                    "Brown rice with steamed broccoli",
                ],
                "DASH diet principles",
            ),
            _meal(
                "Dinner",
                [
                    "Baked salmon with asparagus",
                    "Turkey with roasted Brussels sprouts",
                    "Tofu stir-fry with vegetables",
                ],
                "Minimal salt, herbs for flavor",
            ),
            _meal(
                "Snacks",
                ["Fresh fruit", "Unsalted nuts", "Cucumber slices"],
                "Natural, unprocessed foods",
            ),
        ),
        DiseaseType.OBESITY: (
            _meal(
                "Breakfast",
                [
                    "Egg white omelet with vegetables",
                    "Protein smoothie with berries",
                    "Greek yogurt with chia seeds",
                ],
                "High protein, low calorie",
            ),
            _meal(
                "Lunch",
                [
                    "Large salad with lean protein",
                    "Vegetable soup with legumes",
                    "Grilled chicken with vegetables",
                ],
                "High volume, low calorie density",
            ),
            _meal(
                "Dinner",
                [
                    "Grilled fish with large vegetable portion",
                    "Zucchini noodles with turkey sauce",
                    "Cauliflower rice with stir-fry",
                ],
                "Portion control, vegetable-focused",
            ),
            _meal(
                "Snacks",
                ["Raw vegetables", "Air-popped popcorn", "Berries"],
                "Low calorie, filling options",
            ),
        ),
    }
)

FALLBACK_MENU_DISEASE = DiseaseType.DIABETES

DIET_GUIDELINES: tuple[str, ...] = (
    "Drink 8-10 glasses of water daily",
    "Avoid processed and packaged foods",
    "Limit sugar intake",
    "Eat plenty of vegetables and fruits",
    "Choose whole grains over refined grains",
    "Include lean proteins in every meal",
    "Practice portion control",
    "Avoid late-night eating",
)

SLEEP_TARGET_HOURS = 7.5

SLEEP_TIPS: tuple[str, ...] = (
    "Maintain consistent sleep schedule",
    "Create a dark, quiet sleeping environment",
    "Avoid screens 1 hour before bedtime",
    "Keep bedroom temperature cool (65-68°F)",
    "Avoid caffeine after 2 PM",
    "Practice relaxation techniques before bed",
    "Exercise regularly, but not close to bedtime",
    "Limit daytime naps to 20-30 minutes",
)

STRESS_TECHNIQUES: tuple[str, ...] = (
    "Deep breathing exercises (4-7-8 technique)",
    "Progressive muscle relaxation",
    "Mindfulness meditation",
    "Yoga or tai chi",
    "Journaling",
    "Nature walks",
    "Listening to calming music",
    "Talking to friends or counselor",
)

STRESS_DAILY_PRACTICES: tuple[str, ...] = (
    "Start day with 5 minutes of meditation",
    "Take short breaks every 2 hours",
    "Practice gratitude - write 3 things daily",
    "Limit social media and news consumption",
    "Engage in a hobby you enjoy",
    "Spend time with loved ones",
    "Practice saying no to reduce overwhelm",
    "End day with relaxation routine",
)

# (morning, afternoon, evening)
WEEKLY_TEMPLATE: Mapping[str, tuple[tuple[str, ...], tuple[str, ...], tuple[str, ...]]] = (
    MappingProxyType(
        {
            "Monday": (
                ("30 min walk", "Healthy breakfast", "Hydrate"),
                ("Balanced lunch", "Light stretching", "10 min meditation"),
                ("Light dinner", "Evening walk", "Relaxation"),
            ),
            "Tuesday": (
                ("Yoga session", "Nutritious breakfast", "Plan meals"),
                ("Healthy lunch", "Active break", "Stress relief exercise"),
                ("Home-cooked dinner", "Family time", "Early bedtime prep"),
            ),
            "Wednesday": (
                ("Cardio exercise", "Protein-rich breakfast", "Mindful breathing"),
                ("Veggie-packed lunch", "Short walk", "Hydration check"),
                ("Light dinner", "Hobby time", "Screen-free hour"),
            ),
            "Thursday": (
                ("Strength training", "Energizing breakfast", "Goal review"),
                ("Balanced lunch", "Meditation break", "Healthy snack"),
                ("Nutritious dinner", "Journaling", "Prepare for sleep"),
            ),
            "Friday": (
                ("Active walk", "Healthy breakfast", "Positive affirmations"),
                ("Light lunch", "Stretching", "Social connection"),
                ("Healthy dinner", "Relaxing activity", "Wind down"),
            ),
            "Saturday": (
                ("Longer workout", "Hearty breakfast", "Meal prep"),
                ("Nutritious lunch", "Outdoor activity", "Hobby time"),
                ("Balanced dinner", "Social time", "Self-care routine"),
            ),
            "Sunday": (
                ("Gentle yoga", "Leisurely breakfast", "Week planning"),
                ("Healthy lunch", "Nature walk", "Reflection time"),
                ("Light dinner", "Prepare for week", "Early rest"),
            ),
        }
    )
)

LIFESTYLE_MODIFICATIONS: tuple[str, ...] = (
    "Quit smoking if applicable",
    "Limit alcohol consumption",
    "Maintain healthy weight",
    "Regular health check-ups",
    "Monitor blood pressure regularly",
    "Track your progress daily",
    "Stay consistent with lifestyle changes",
    "Seek support from family and friends",
)


def _as_risk_level(risk_level: RiskLevel | str) -> RiskLevel:
    try:
        return RiskLevel(risk_level)
    except ValueError:
        raise UnknownRiskLevelError(f"Unknown risk level: {risk_level!r}") from None


def _as_disease_type(disease_type: DiseaseType | str) -> DiseaseType | None:
    try:
        return DiseaseType(disease_type)
    except ValueError:
        return None


def generate_fitness_plan(
    disease_type: DiseaseType | str, risk_level: RiskLevel | str
) -> FitnessPlan:
    """Exercise programme for a risk tier; the disease type does not change it."""
    level = _as_risk_level(risk_level)
    return FitnessPlan(
        exercises=list(EXERCISES_BY_RISK[level]),
        duration_weeks=PROGRAM_WEEKS[level],
        intensity=INTENSITY[level],
    )


def generate_diet_plan(disease_type: DiseaseType | str, risk_level: RiskLevel | str) -> DietPlan:
    """
    Disease-specific menu with a risk-tiered calorie target.

    Disease types without a menu get the diabetes menu; the substitution is
    logged so it can be traced.
    """
    level = _as_risk_level(risk_level)
    disease = _as_disease_type(disease_type)

    if disease is None or disease not in MENUS:
        logger.warning(
            "diet_menu_fallback",
            requested_disease_type=str(getattr(disease_type, "value", disease_type)),
            fallback_disease_type=FALLBACK_MENU_DISEASE.value,
        )
        disease = FALLBACK_MENU_DISEASE

    return DietPlan(
        meals=list(MENUS[disease]),
        calories_target=CALORIE_TARGETS[level],
        guidelines=list(DIET_GUIDELINES),
    )


def generate_sleep_recommendations(risk_level: RiskLevel | str) -> SleepRecommendations:
    # risk_level does not vary the advice yet
    return SleepRecommendations(target_hours=SLEEP_TARGET_HOURS, tips=list(SLEEP_TIPS))


def generate_stress_management(risk_level: RiskLevel | str) -> StressManagement:
    return StressManagement(
        techniques=list(STRESS_TECHNIQUES),
        daily_practices=list(STRESS_DAILY_PRACTICES),
    )


def generate_weekly_schedule(
    disease_type: DiseaseType | str, risk_level: RiskLevel | str
) -> dict[str, DaySchedule]:
    """Generic healthy weekly routine, Monday through Sunday."""
    return {
        day: DaySchedule(morning=list(morning), afternoon=list(afternoon), evening=list(evening))
        for day, (morning, afternoon, evening) in WEEKLY_TEMPLATE.items()
    }


def assemble_recommendation(
    disease_type: DiseaseType | str, risk_level: RiskLevel | str
) -> RecommendationPlan:
    """Build the complete plan for one (disease type, risk level) pair."""
    level = _as_risk_level(risk_level)

    plan = RecommendationPlan(
        fitness_plan=generate_fitness_plan(disease_type, level),
        diet_plan=generate_diet_plan(disease_type, level),
        lifestyle_modifications=list(LIFESTYLE_MODIFICATIONS),
        sleep_recommendations=generate_sleep_recommendations(level),
        stress_management=generate_stress_management(level),
        weekly_schedule=generate_weekly_schedule(disease_type, level),
    )

    logger.debug(
        "recommendation_assembled",
        disease_type=str(getattr(disease_type, "value", disease_type)),
        risk_level=level.value,
    )
    return plan

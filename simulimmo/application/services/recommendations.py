"""Advisory rules.

Every function here is a pure, order-preserving rule list: the order of the
checks is the order of the returned records.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from simulimmo.core.formatting import format_euro, format_pct
from simulimmo.domain.calculator.tax import MICRO_FONCIER_CEILING
from simulimmo.domain.models.city import CityMarketInfo
from simulimmo.domain.models.rental import FiscalRegime
from simulimmo.domain.models.results import OptimizationScenario, Recommendation

# Thresholds
PRICE_PREMIUM_RATIO = 1.15
RENT_DISCOUNT_RATIO = 0.85
LOW_CASHFLOW = 100.0
MIN_GROSS_YIELD = 4.0
MIN_NET_YIELD = 2.0
LONG_LOAN_YEARS = 20
HIGH_RATE_PCT = 3.0
MIN_DOWN_PAYMENT_RATIO = 0.10
MAX_VACANCY_PCT = 3.0
MAX_MANAGEMENT_FEE_PCT = 8.0

# Optimization assumptions
RENT_INCREASE_RATIO = 0.05
FURNISHED_RENT_PREMIUM = 0.15
FURNISHING_COST_PER_SQM = 75.0
REFINANCING_GAIN_RATIO = 0.01
TARGET_MAINTENANCE_PCT = 3.0
RENOVATION_BUDGET_RATIO = 0.05
RENOVATION_RENT_PREMIUM = 0.10


@dataclass(frozen=True)
class InvestmentMetrics:
    """Computed figures the investment rules look at."""
    purchase_price: float
    area: float
    monthly_rent: float
    monthly_cashflow: float
    gross_yield: float
    net_yield: float
    regime: FiscalRegime
    is_furnished: bool
    loan_duration_years: int
    interest_rate_pct: float
    down_payment: float
    total_investment: float
    management_fee_rate_pct: float
    vacancy_rate_pct: float = 0.0
    maintenance_rate_pct: float = 0.0
    renovation_cost: float = 0.0
    city: Optional[CityMarketInfo] = None


def _yield_delta(monthly_delta: float, purchase_price: float) -> float:
    if purchase_price <= 0:
        return 0.0
    return monthly_delta * 12.0 / purchase_price * 100.0


def investment_recommendations(m: InvestmentMetrics) -> list[Recommendation]:
    """Advice on an investment simulation.

    City comparisons are skipped when the city is unknown.
    """
    recs: list[Recommendation] = []

    if m.city is not None and m.area > 0:
        price_per_sqm = m.purchase_price / m.area
        rent_per_sqm = m.monthly_rent / m.area

        if price_per_sqm > m.city.price_per_sqm * PRICE_PREMIUM_RATIO:
            recs.append(Recommendation(
                title="Prix d'achat élevé",
                description=(
                    f"Le prix au m² ({format_euro(price_per_sqm)}/m²) est supérieur à la moyenne de "
                    f"{m.city.name} ({format_euro(m.city.price_per_sqm)}/m²). Vérifiez que les "
                    "caractéristiques du bien justifient cette prime."
                ),
            ))

        if rent_per_sqm < m.city.rent_per_sqm * RENT_DISCOUNT_RATIO:
            recs.append(Recommendation(
                title="Loyer potentiellement sous-évalué",
                description=(
                    f"Le loyer au m² ({format_euro(rent_per_sqm)}/m²) est inférieur à la moyenne de "
                    f"{m.city.name} ({format_euro(m.city.rent_per_sqm)}/m²). Il pourrait être possible "
                    "d'augmenter le loyer."
                ),
            ))

    if m.monthly_cashflow < 0:
        recs.append(Recommendation(
            title="Cash-flow négatif",
            description=(
                f"Votre investissement génère un cash-flow mensuel négatif de {format_euro(m.monthly_cashflow)}. "
                "Envisagez d'augmenter le loyer, de réduire les charges ou d'augmenter votre apport "
                "personnel pour améliorer ce résultat."
            ),
        ))
    elif m.monthly_cashflow < LOW_CASHFLOW:
        recs.append(Recommendation(
            title="Cash-flow faible",
            description=(
                f"Votre cash-flow mensuel ({format_euro(m.monthly_cashflow)}) est positif mais relativement "
                "faible. Il pourrait être insuffisant pour couvrir d'éventuels imprévus."
            ),
        ))

    if m.gross_yield < MIN_GROSS_YIELD:
        recs.append(Recommendation(
            title="Rentabilité brute faible",
            description=(
                f"Votre rentabilité brute ({format_pct(m.gross_yield)}) est inférieure au seuil recommandé "
                "de 4 %. Cet investissement pourrait être davantage orienté sur la plus-value à long "
                "terme que sur les revenus."
            ),
        ))

    if m.net_yield < MIN_NET_YIELD:
        recs.append(Recommendation(
            title="Rentabilité nette faible",
            description=(
                f"Votre rentabilité nette ({format_pct(m.net_yield)}) est faible. Évaluez si les "
                "perspectives de plus-value compensent ce rendement."
            ),
        ))

    annual_rent = m.monthly_rent * 12.0
    if not m.is_furnished and m.regime == FiscalRegime.MICRO_FONCIER and annual_rent > MICRO_FONCIER_CEILING:
        recs.append(Recommendation(
            title="Optimisation fiscale possible",
            description=(
                "Avec des revenus locatifs supérieurs à 15 000 € par an, le régime réel pourrait être "
                "plus avantageux que le micro-foncier. Consultez un expert-comptable."
            ),
        ))

    if not m.is_furnished and m.regime == FiscalRegime.REAL and annual_rent < MICRO_FONCIER_CEILING:
        recs.append(Recommendation(
            title="Simplification fiscale possible",
            description=(
                "Avec des revenus locatifs inférieurs à 15 000 € par an, le régime micro-foncier "
                "pourrait être plus simple à gérer, sauf si vos charges déductibles sont significatives."
            ),
        ))

    if not m.is_furnished:
        recs.append(Recommendation(
            title="Meublé vs Non meublé",
            description=(
                "La location meublée (LMNP) peut offrir des avantages fiscaux supérieurs. Évaluez si "
                "cette option est adaptée à votre bien et à votre cible locative."
            ),
        ))

    if m.loan_duration_years > LONG_LOAN_YEARS and m.interest_rate_pct > HIGH_RATE_PCT:
        recs.append(Recommendation(
            title="Durée de prêt élevée",
            description=(
                f"Un prêt de {m.loan_duration_years} ans à {format_pct(m.interest_rate_pct)} augmente "
                "significativement le coût total. Envisagez de réduire la durée si possible, ou de "
                "renégocier après quelques années."
            ),
        ))

    if m.down_payment < m.total_investment * MIN_DOWN_PAYMENT_RATIO:
        recs.append(Recommendation(
            title="Apport personnel faible",
            description=(
                "Un apport personnel inférieur à 10 % peut fragiliser votre investissement. Envisagez "
                "d'augmenter votre apport pour améliorer votre cash-flow et réduire les risques."
            ),
        ))

    if m.vacancy_rate_pct > MAX_VACANCY_PCT:
        gain = round(m.monthly_rent * (m.vacancy_rate_pct - MAX_VACANCY_PCT) / 100.0 * 12.0)
        recs.append(Recommendation(
            title="Vacance locative élevée",
            description=(
                "Réduisez les périodes de vacance locative en améliorant la qualité de votre annonce, "
                "en ajustant le prix du loyer ou en faisant appel à un gestionnaire professionnel."
            ),
            impact=f"+{format_euro(gain)}/an de revenus supplémentaires",
        ))

    if m.management_fee_rate_pct > MAX_MANAGEMENT_FEE_PCT:
        recs.append(Recommendation(
            title="Frais de gestion élevés",
            description=(
                f"Vos frais de gestion ({format_pct(m.management_fee_rate_pct)}) sont relativement élevés. "
                "Comparez les offres de plusieurs agences ou envisagez la gestion en direct si possible."
            ),
        ))

    return recs


def optimization_scenarios(m: InvestmentMetrics) -> list[OptimizationScenario]:
    """What-if changes and their estimated monthly effect."""
    scenarios: list[OptimizationScenario] = []
    price = m.purchase_price

    def scenario(name: str, delta: Optional[float], easiness: str, description: str,
                 yield_impact: Optional[str] = None) -> OptimizationScenario:
        cashflow_impact = f"+{format_euro(delta)}" if delta is not None else "Variable"
        if yield_impact is None:
            yield_impact = f"+{format_pct(_yield_delta(delta, price))}" if delta is not None else "Variable"
        return OptimizationScenario(
            name=name,
            cashflow_impact=cashflow_impact,
            yield_impact=yield_impact,
            easiness=easiness,
            description=description,
            cashflow_delta=delta,
        )

    rent_increase = float(round(m.monthly_rent * RENT_INCREASE_RATIO))
    scenarios.append(scenario(
        f"Augmentation du loyer de {format_euro(rent_increase)}",
        rent_increase,
        "Moyenne",
        f"Augmenter le loyer de 5 % améliorerait votre cash-flow mensuel de {format_euro(rent_increase)}.",
    ))

    if m.management_fee_rate_pct > 0:
        savings = float(round(m.monthly_rent * m.management_fee_rate_pct / 100.0))
        scenarios.append(scenario(
            "Gestion en direct",
            savings,
            "Difficile",
            "Gérer vous-même la location vous ferait économiser les frais d'agence, mais demanderait "
            "plus de temps et d'expertise.",
        ))

    if not m.is_furnished:
        furnished_increase = float(round(m.monthly_rent * FURNISHED_RENT_PREMIUM))
        furnishing_cost = round(m.area * FURNISHING_COST_PER_SQM)
        scenarios.append(scenario(
            "Passage en location meublée",
            furnished_increase,
            "Moyenne",
            f"Meubler votre bien (coût estimé : {format_euro(furnishing_cost)}) permettrait d'augmenter "
            "le loyer d'environ 15 % et d'optimiser votre fiscalité.",
        ))

    if m.regime == FiscalRegime.MICRO_FONCIER and m.monthly_rent > MICRO_FONCIER_CEILING / 12.0:
        scenarios.append(scenario(
            "Passage au régime réel",
            None,
            "Complexe",
            "Le régime réel pourrait être plus avantageux avec vos revenus locatifs. Consultez un "
            "expert-comptable pour une analyse personnalisée.",
        ))

    if m.loan_duration_years > 15 and m.interest_rate_pct > HIGH_RATE_PCT:
        refinancing = float(round(price * REFINANCING_GAIN_RATIO / 12.0))
        scenarios.append(scenario(
            "Renégociation du prêt",
            refinancing,
            "Variable",
            "Renégocier votre prêt ou le racheter après quelques années pourrait réduire vos "
            "mensualités si les taux baissent.",
        ))

    if m.maintenance_rate_pct > TARGET_MAINTENANCE_PCT:
        maintenance = float(round(m.monthly_rent * (m.maintenance_rate_pct - TARGET_MAINTENANCE_PCT) / 100.0))
        scenarios.append(scenario(
            "Ajustement des provisions pour travaux",
            maintenance,
            "Facile",
            "Réduire vos provisions pour travaux à 3 % améliorerait votre cash-flow, mais pourrait "
            "vous exposer à des dépenses imprévues.",
        ))

    if m.renovation_cost < price * RENOVATION_BUDGET_RATIO:
        budget = round(price * RENOVATION_BUDGET_RATIO)
        renovation_increase = float(round(m.monthly_rent * RENOVATION_RENT_PREMIUM))
        scenarios.append(scenario(
            "Rénovation qualitative",
            renovation_increase,
            "Moyenne",
            f"Investir {format_euro(budget)} en rénovations pourrait permettre d'augmenter le loyer "
            "d'environ 10 % et de réduire la vacance locative.",
            yield_impact="Variable",
        ))

    return scenarios


def purchasing_power_advice(
    personal_contribution: float,
    borrowing_capacity: float,
    loan_duration_years: int,
    debt_ratio: float,
    net_budget: float,
    monthly_income: float,
) -> list[Recommendation]:
    """Advice on a purchasing power calculation.

    Args:
        personal_contribution: Apport in €
        borrowing_capacity: Borrowable principal in €
        loan_duration_years: Loan term in years
        debt_ratio: Actual debt ratio as a fraction (0.35 = 35%)
        net_budget: Budget left for the purchase in €
        monthly_income: Total monthly income in €
    """
    advice: list[Recommendation] = []

    if borrowing_capacity > 0 and personal_contribution / borrowing_capacity < 0.1:
        advice.append(Recommendation(
            title="Apport personnel",
            description=(
                "Augmenter votre apport personnel à au moins 10 % du montant emprunté améliorerait vos "
                "conditions de prêt et pourrait vous permettre d'obtenir un meilleur taux."
            ),
        ))

    if loan_duration_years > 25:
        advice.append(Recommendation(
            title="Durée du prêt",
            description=(
                "Un prêt sur plus de 25 ans augmente significativement le coût total. Envisagez de "
                "réduire la durée si votre budget le permet."
            ),
        ))
    elif loan_duration_years < 15 and debt_ratio > 0.30:
        advice.append(Recommendation(
            title="Durée du prêt",
            description=(
                "Allonger la durée de votre prêt pourrait réduire vos mensualités et améliorer votre "
                "taux d'endettement."
            ),
        ))

    if debt_ratio > 0.33:
        advice.append(Recommendation(
            title="Taux d'endettement",
            description=(
                "Votre taux d'endettement est élevé. Les banques préfèrent généralement qu'il reste sous "
                "33 %. Envisagez d'augmenter votre apport ou de viser un bien moins cher."
            ),
        ))

    if net_budget < 150_000 and monthly_income > 2500:
        advice.append(Recommendation(
            title="Budget limité",
            description=(
                "Avec vos revenus, vous pourriez envisager d'augmenter votre capacité d'emprunt en "
                "réduisant vos dettes actuelles ou en constituant un apport personnel plus important."
            ),
        ))

    return advice

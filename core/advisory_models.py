# core/advisory_models.py
"""Structured results returned by the AI collaborator, one model per advisory screen."""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field

RiskLevel = Literal["Low", "Medium", "High"]


class DiagnosisResult(BaseModel):
    crop_name: str = Field(description="Name of the crop visible in the photo.")
    health_score: float = Field(ge=0, le=100, description="Overall plant health from 0 to 100.")
    detected_issues: List[str] = Field(description="Pests, diseases or deficiencies found.")
    treatment_plan: List[str] = Field(description="Ordered treatment steps.")
    prevention: List[str] = Field(description="Preventive measures for the future.")
    risk_level: RiskLevel = Field(description="'Low', 'Medium' or 'High'.")


class NutrientRequirement(BaseModel):
    n: str
    p: str
    k: str


class PredictedCrop(BaseModel):
    name: str
    probability: float = Field(description="Suitability probability from 0 to 100.")
    yield_estimate: str
    profit_potential: RiskLevel = Field(description="'High', 'Medium' or 'Low'.")
    risk_factor: str
    suitable_season: str
    rainfall_requirement: Optional[str] = None
    historical_trend: Optional[str] = None
    why: str = Field(description="Why this crop suits the farm.")
    input_cost_per_acre: str = Field(description="Input cost per acre in Indian Rupees (₹).")
    market_price_forecast: str = Field(description="Expected market price in Indian Rupees (₹).")
    nutrient_requirement: NutrientRequirement
    harvest_window: str
    resilience_score: float
    planting_combination: Optional[str] = None
    sowing_method: str
    ideal_spacing: str
    companion_crops: List[str] = []


class CropPredictions(BaseModel):
    predictions: List[PredictedCrop] = Field(description="Top 3 recommended crops, best first.")


class FertilizerStage(BaseModel):
    stage: str
    timing: str
    npk: str
    dosage: str
    organic_alternative: str
    organic_instructions: str
    organic_benefits: str
    instructions: str


class FertilizerPlan(BaseModel):
    crop: str
    total_duration: str
    stages: List[FertilizerStage]


class FieldZone(BaseModel):
    crop_name: str
    percentage: float = Field(ge=0, le=100, description="Share of the field in percent.")
    color: str = Field(description="Hex colour used to draw the zone, e.g. '#22c55e'.")
    spacing: str
    role: Literal["Main Crop", "Companion", "Boundary"]


class IntercroppingPlan(BaseModel):
    combination_name: str = Field(description="Catchy name for the crop pair.")
    profit_multiplier: str = Field(description="Estimated ROI increase, e.g. '+35%'.")
    reasoning: str
    sowing_pattern: str = Field(description="Row ratio, e.g. '8 Rows Wheat : 2 Rows Mustard'.")
    zones: List[FieldZone]


class WeatherDay(BaseModel):
    day: str
    temp: float = Field(description="Expected temperature in °C.")
    condition: str
    color: str = Field(description="Hex colour for the condition.")
    impact: str = Field(description="What the weather means for field work.")


class WeeklyForecast(BaseModel):
    days: List[WeatherDay] = Field(description="One entry per day, 7 days.")


class EncyclopediaEntry(BaseModel):
    title: str
    description: str
    classification: Literal["Harmful", "Beneficial", "Neutral", "Plant"]
    life_cycle: Optional[str] = None
    control_methods: Optional[List[str]] = None
    organic_solutions: Optional[List[str]] = None
    image_prompt: Optional[str] = None


class ActionableSignal(BaseModel):
    title: str
    description: str
    priority: RiskLevel


class ActionableSignals(BaseModel):
    signals: List[ActionableSignal] = Field(description="Exactly 2 signals, most urgent first.")

from pydantic import BaseModel, Field, field_validator
from typing import List, Literal, Optional
from fuzzystat.schedule import validate_time
from fuzzystat.weather import GEOCODING_URL, FORECAST_URL

DataSource = Literal['manual', 'open-meteo']

class Defaults(BaseModel):
    temperature_c: float = 22.0
    humidity_pct: float = Field(45.0, ge=0, le=100)
    target_c: float = 20.0
    location: str = 'Vienna'
    data_source: DataSource = 'manual'

class Weather(BaseModel):
    timeout_s: float = Field(5.0, gt=0)
    geocoding_url: str = GEOCODING_URL
    forecast_url: str = FORECAST_URL

class ScheduleItem(BaseModel):
    name: str
    time: str  # 'HH:MM' 24h
    temperature: float

    @field_validator('time')
    @classmethod
    def _hhmm(cls, v: str) -> str:
        return validate_time(v)

class Logging(BaseModel):
    enabled: bool = True
    level: str = 'INFO'
    file: Optional[str] = None
    package_level: Optional[str] = None  # fuzzystat.* only; defaults to level

class AppConfig(BaseModel):
    defaults: Defaults = Field(default_factory=Defaults)
    weather: Weather = Field(default_factory=Weather)
    schedule: List[ScheduleItem] = Field(default_factory=list)
    logging: Logging = Field(default_factory=Logging)

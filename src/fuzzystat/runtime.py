import os, yaml
from fuzzystat.config import AppConfig
from fuzzystat.loop import HeadlessLoop
from fuzzystat.thermostat import FuzzyStat
from fuzzystat.weather import OpenMeteoClient

CONFIG_PATHS = ['config/config.yaml', 'config.yaml']

def load_config(path: str | None = None) -> AppConfig:
    for p in ([path] if path else []) + CONFIG_PATHS:
        if p and os.path.exists(p):
            with open(p, 'r') as f:
                return AppConfig.model_validate(yaml.safe_load(f) or {})
    return AppConfig()

def build_runtime(cfg: AppConfig, loop=None, weather=None):
    loop = loop or HeadlessLoop()
    weather = weather or OpenMeteoClient(cfg.weather.timeout_s, cfg.weather.geocoding_url, cfg.weather.forecast_url)
    app = FuzzyStat(loop, weather, defaults=cfg.defaults)
    app.load_schedule(cfg.schedule)
    return app, loop

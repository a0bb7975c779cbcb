# map_route/io/config.py
import json

from map_route.config.models import AppModel


def load_config(path: str) -> AppModel:
    with open(path, encoding="utf-8") as f:
        return AppModel.model_validate(json.load(f))

"""Runtime configuration and environment presets."""

from dataclasses import dataclass, field, replace
from datetime import date
from pathlib import Path

from salescast.utils.io import load_toml_config
from salescast.utils.types import Interval, ParamMapping, parse_interval

type ConfigDict = dict[str, str | int | bool | dict]

PYPROJECT = Path(__file__).parent.parent / "pyproject.toml"


@dataclass(frozen=True)
class GeneratorConfig:
    start: date
    periods: int
    interval: Interval
    seed: int | None = None


@dataclass(frozen=True)
class ForecastConfig:
    model_id: str
    horizon: int
    params: ParamMapping = field(default_factory=dict)


@dataclass(frozen=True)
class ExportConfig:
    output_dir: Path
    fmt: str
    enabled: bool = False


@dataclass(frozen=True)
class SalescastConfig:
    generator: GeneratorConfig
    forecast: ForecastConfig
    export: ExportConfig


def load_pipeline_config(env: str = "production") -> SalescastConfig:
    match env:
        case "production":
            generator = GeneratorConfig(start=date(2024, 1, 1), periods=24, interval=Interval.MONTH)
            export = ExportConfig(output_dir=Path("output"), fmt="csv")
        case "staging":
            generator = GeneratorConfig(start=date(2024, 1, 1), periods=24, interval=Interval.MONTH)
            export = ExportConfig(output_dir=Path("output/staging"), fmt="json")
        case "development":
            generator = GeneratorConfig(
                start=date(2024, 1, 1), periods=365, interval=Interval.DAY, seed=7,
            )
            export = ExportConfig(output_dir=Path("output/dev"), fmt="csv")
        case "test":
            generator = GeneratorConfig(
                start=date(2024, 1, 1), periods=24, interval=Interval.MONTH, seed=42,
            )
            export = ExportConfig(output_dir=Path("output/test"), fmt="csv")
        case other:
            raise ValueError(f"Unknown environment: {other}")

    return SalescastConfig(
        generator=generator,
        forecast=ForecastConfig(model_id="linear", horizon=12),
        export=export,
    )


def apply_overrides(config: SalescastConfig, overrides: ConfigDict) -> SalescastConfig:
    """Layer a flat or sectioned mapping over a preset.

    Accepts the ``[tool.salescast]`` layout, e.g. ``{"forecast": {"model": "seasonal"}}``.
    Unknown keys raise ``ValueError``.
    """
    generator, forecast, export = config.generator, config.forecast, config.export

    for section, values in overrides.items():
        match section, values:
            case "env", _:
                continue
            case "generator", dict():
                for key, value in values.items():
                    match key:
                        case "start":
                            generator = replace(generator, start=date.fromisoformat(str(value)))
                        case "periods":
                            generator = replace(generator, periods=int(value))
                        case "interval":
                            generator = replace(generator, interval=parse_interval(value))
                        case "seed":
                            generator = replace(generator, seed=None if value is None else int(value))
                        case unknown:
                            raise ValueError(f"Unknown generator setting: {unknown}")
            case "forecast", dict():
                for key, value in values.items():
                    match key:
                        case "model":
                            forecast = replace(forecast, model_id=str(value))
                        case "horizon":
                            forecast = replace(forecast, horizon=int(value))
                        case "params":
                            forecast = replace(
                                forecast, params={k: float(v) for k, v in value.items()},
                            )
                        case unknown:
                            raise ValueError(f"Unknown forecast setting: {unknown}")
            case "export", dict():
                for key, value in values.items():
                    match key:
                        case "output_dir":
                            export = replace(export, output_dir=Path(value))
                        case "format":
                            export = replace(export, fmt=str(value))
                        case "enabled":
                            export = replace(export, enabled=bool(value))
                        case unknown:
                            raise ValueError(f"Unknown export setting: {unknown}")
            case unknown, _:
                raise ValueError(f"Unknown config section: {unknown}")

    return SalescastConfig(generator=generator, forecast=forecast, export=export)


def get_env_config(pyproject: Path = PYPROJECT) -> ConfigDict:
    """Read the ``[tool.salescast]`` table from pyproject.toml."""
    if not pyproject.exists():
        return {}
    data = load_toml_config(pyproject)
    return data.get("tool", {}).get("salescast", {})

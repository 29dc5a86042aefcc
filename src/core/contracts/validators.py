"""
JSON Schema Contract Validators

Проверка метаданных источника против JSON Schema контрактов, которые
поставляются внутри пакета (каталог schema/):
- dataset_summary.json — снапшот структурного прохода TabularReader

Pydantic модели проверяются в JSON форме (model_dump(mode="json")), т.е.
ровно в том виде, в котором они уходят за пределы процесса.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from pydantic import BaseModel

SCHEMA_DIR = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик и кэш JSON Schema файлов контрактов.

    Каждая схема при первой загрузке проходит meta-валидацию Draft 2020-12.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = Path(schema_dir) if schema_dir is not None else SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._cache: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема контракта по имени файла без расширения.

        Raises:
            FileNotFoundError: файла {schema_name}.json нет в каталоге
            ValueError: файл не является валидной JSON Schema 2020-12
        """
        cached = self._cache.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.is_file():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e.message}") from e

        self._cache[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Валидатор одного контракта: dict или pydantic модель против схемы."""

    schema_name: str = ""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        self.schema = (loader or _SCHEMA_LOADER).load_schema(self.schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: первое найденное нарушение схемы
        """
        self.validator.validate(data)

    def validate_model(self, model: BaseModel) -> None:
        """Проверка JSON формы pydantic модели."""
        self.validate(model.model_dump(mode="json"))

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)


class DatasetSummaryValidator(ContractValidator):
    """Контракт dataset_summary."""

    schema_name = "dataset_summary"


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_dataset_summary(data: Dict[str, Any]) -> None:
    """
    Валидация dataset_summary данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    DatasetSummaryValidator().validate(data)

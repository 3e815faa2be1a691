"""Factory classes for building validation components from configuration."""

import logging

from schemaknobs_config import ConfigError, FactoryBase

from .dispatcher import SchemaValidator
from .loader import SchemaDocument
from .options import ValidatorOptions

logger = logging.getLogger(__name__)


class ValidatorFactory(FactoryBase):
    """Factory for creating SchemaValidator instances from configuration.

    Configuration Options:
        coerce_value (bool): Convert numeric and boolean strings (default: False)
        datetime_coerce_class (str): ``"iso"``, ``"none"`` or a dotted path to
            a coercion target (default: no date-time coercion)

    Example Configuration:
        validators:
          - name: query
            factory: schemaknobs_validation.factory.ValidatorFactory
            coerce_value: true
            datetime_coerce_class: iso
    """

    def create(self, **config) -> SchemaValidator:
        """Create a SchemaValidator.

        Args:
            **config: Validator options

        Returns:
            SchemaValidator instance
        """
        options = ValidatorOptions.from_dict(config)
        logger.info(
            f"Creating SchemaValidator: coerce_value={options.coerce_value}, "
            f"datetime_coerce_class={options.datetime_coerce_class!r}"
        )
        return SchemaValidator(options)


class SchemaDocumentFactory(FactoryBase):
    """Factory for loading schema documents.

    Configuration Options:
        path (str): YAML or JSON file to load
        document (dict): Inline document, used when no path is given
    """

    def create(self, **config) -> SchemaDocument:
        path = config.get("path")
        if path:
            logger.info(f"Creating SchemaDocument from {path}")
            return SchemaDocument.from_file(path)

        document = config.get("document")
        if document is None:
            raise ConfigError(
                "Schema document configuration needs 'path' or 'document'",
                context={"keys": sorted(config)},
            )
        logger.info("Creating SchemaDocument from inline document")
        return SchemaDocument(document)


# Create singleton instances for registration
validator_factory = ValidatorFactory()
document_factory = SchemaDocumentFactory()

"""Bundle registry and definition validation.

Provides standalone cross-locale checks for nls bundles, for CI pipelines,
linters and the `nlsbundle check` command. Lookups never run these checks;
a registry that fails validation still resolves every root key.

Architecture:
    - validate_registry(): Checks a built registry
    - validate_definition(): Builds a registry from a definition (mapping,
      parsed module or module source), then validates it
    - _load_errors(): Pass 1 - Convert failed loads to ValidationError
    - _locale_warnings(): Pass 2 - Declared locales without a bundle
    - _bundle_warnings(): Pass 3 - Orphans, placeholder mismatches,
      missing translations and empty messages per bundle

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from nlsbundle.constants import DEFAULT_RESOURCE_ID, PLACEHOLDER_TOKEN, ROOT_LOCALE
from nlsbundle.diagnostics import (
    BundleDefinitionError,
    DiagnosticCode,
    NlsError,
    NlsSyntaxError,
    ValidationError,
    ValidationResult,
    ValidationWarning,
)
from nlsbundle.locale_utils import locale_fallback_chain
from nlsbundle.localization.loading import ResourceLoader, ResourceLoadResult
from nlsbundle.runtime import BundleRegistry, MessageBundle, RegistryConfig
from nlsbundle.syntax import NlsModule, NlsModuleParser

__all__ = ["validate_definition", "validate_registry"]

logger = logging.getLogger(__name__)


def _error_from_exception(error: BaseException, locale: str | None = None) -> ValidationError:
    """Convert a load or definition exception to a ValidationError."""
    line: int | None = None
    column: int | None = None
    if isinstance(error, NlsSyntaxError) and error.line:
        line, column = error.line, error.column

    if isinstance(error, NlsError) and error.diagnostic is not None:
        code = error.diagnostic.code
        message = error.diagnostic.message
        locale = error.diagnostic.locale or locale
    else:
        code = DiagnosticCode.VALIDATION_LOCALE_NOT_LOADED
        message = str(error)
    return ValidationError(code=code, message=message, locale=locale, line=line, column=column)


def _load_errors(results: tuple[ResourceLoadResult, ...]) -> list[ValidationError]:
    """Pass 1: failed external loads (NOT_FOUND results are warnings, not errors)."""
    return [
        _error_from_exception(result.error, result.locale)
        for result in results
        if result.is_error and result.error is not None
    ]


def _locale_warnings(registry: BundleRegistry) -> list[ValidationWarning]:
    """Pass 2: locales declared available without a registered bundle."""
    return [
        ValidationWarning(
            code=DiagnosticCode.VALIDATION_LOCALE_NOT_LOADED,
            message=f"Locale '{tag}' is declared but no bundle is loaded; lookups fall back",
            locale=tag,
        )
        for tag in registry.unloaded_locales
    ]


def _covered_keys(registry: BundleRegistry, tag: str) -> set[str]:
    """Keys defined by the non-root bundles on tag's chain."""
    covered: set[str] = set()
    for chain_tag in locale_fallback_chain(tag)[:-1]:
        bundle = registry.get_bundle(chain_tag)
        if bundle is not None:
            covered.update(bundle)
    return covered


def _bundle_warnings(
    registry: BundleRegistry, root: MessageBundle, bundle: MessageBundle
) -> list[ValidationWarning]:
    """Pass 3: compare one locale bundle against root."""
    tag = bundle.locale
    warnings: list[ValidationWarning] = []

    for key in sorted(root.missing_keys(bundle)):
        warnings.append(
            ValidationWarning(
                code=DiagnosticCode.VALIDATION_ORPHAN_KEY,
                message=f"Key '{key}' is not defined in the root bundle",
                locale=tag,
                message_key=key,
            )
        )

    for key in sorted(bundle):
        template = bundle.get_template(key)
        if not template.source:
            warnings.append(
                ValidationWarning(
                    code=DiagnosticCode.VALIDATION_EMPTY_MESSAGE,
                    message=f"Message '{key}' is empty",
                    locale=tag,
                    message_key=key,
                )
            )
        root_template = root.get(key)
        if root_template is None or template.arity <= root_template.arity:
            continue
        token = PLACEHOLDER_TOKEN.format(index=template.arity - 1)
        warnings.append(
            ValidationWarning(
                code=DiagnosticCode.VALIDATION_PLACEHOLDER_MISMATCH,
                message=(
                    f"Message '{key}' uses {token} but the root message takes "
                    f"{root_template.arity} argument(s)"
                ),
                locale=tag,
                message_key=key,
            )
        )

    missing = root.keys() - _covered_keys(registry, tag)
    for key in sorted(missing):
        warnings.append(
            ValidationWarning(
                code=DiagnosticCode.VALIDATION_MISSING_TRANSLATION,
                message=f"Message '{key}' has no translation; root text is used",
                locale=tag,
                message_key=key,
            )
        )
    return warnings


def validate_registry(registry: BundleRegistry) -> ValidationResult:
    """Validate a registry's bundles against each other.

    Errors: missing root bundle, external locales that failed to load or
    parse. Warnings: orphan keys, translations referencing placeholder
    indexes beyond the root message's arity, declared-but-unloaded locales,
    untranslated keys and empty messages.

    Args:
        registry: Registry to check (frozen or not)

    Returns:
        ValidationResult

    Example:
        >>> result = validate_registry(registry)
        >>> for warning in result.warnings:
        ...     print(warning.format())
    """
    errors = _load_errors(registry.get_load_summary().results)
    warnings = _locale_warnings(registry)

    root = registry.get_bundle(ROOT_LOCALE)
    if root is None:
        errors.insert(
            0,
            ValidationError(
                code=DiagnosticCode.ROOT_BUNDLE_MISSING,
                message="Bundle registry has no root bundle",
            ),
        )
    else:
        for key in sorted(root):
            if not root.get_template(key).source:
                warnings.append(
                    ValidationWarning(
                        code=DiagnosticCode.VALIDATION_EMPTY_MESSAGE,
                        message=f"Message '{key}' is empty",
                        locale=ROOT_LOCALE,
                        message_key=key,
                    )
                )
        for tag in registry.locales:
            bundle = registry.get_bundle(tag)
            if tag != ROOT_LOCALE and bundle is not None:
                warnings.extend(_bundle_warnings(registry, root, bundle))

    logger.debug("Validated registry: %d errors, %d warnings", len(errors), len(warnings))
    return ValidationResult(errors=tuple(errors), warnings=tuple(warnings))


def validate_definition(
    definition: Mapping[str, object] | NlsModule | str,
    loader: ResourceLoader | None = None,
    *,
    config: RegistryConfig | None = None,
    resource_id: str = DEFAULT_RESOURCE_ID,
    source_path: str | None = None,
) -> ValidationResult:
    """Validate a bundle definition without keeping the registry.

    Args:
        definition: Nested mapping, parsed master module, or master module
            source text
        loader: Loader for locales flagged true (optional)
        config: Registry configuration used for the trial build
        resource_id: Module file name passed to the loader
        source_path: Path reported in diagnostics when definition is source

    Returns:
        ValidationResult. A definition that cannot be built yields a single
        error and no warnings.

    Thread Safety:
        Thread-safe. Builds an isolated registry per call.
    """
    config = config if config is not None else RegistryConfig()
    try:
        if isinstance(definition, str):
            parser = NlsModuleParser(max_source_size=config.max_source_size)
            definition = parser.parse(definition, source_path=source_path)
        registry = BundleRegistry.from_definition(
            definition, loader, config=config, resource_id=resource_id
        )
    except BundleDefinitionError as e:
        logger.error("Critical validation error: %s", e)
        return ValidationResult.invalid(errors=(_error_from_exception(e),), warnings=())
    return validate_registry(registry)

"""Host entry point for structure verification.

StructureManager ties a loaded StructureConfig to the reconciler: it
resolves each configured base directory, builds its tree and runs a
reconciliation pass against it. How failures are surfaced (abort,
log, continue) is left to the caller.
"""

import logging
from dataclasses import dataclass

from structman.core.paths import BaseDirectory, PathResolutionError, resolve_base_dir
from structman.reconcile.reconciler import Reconciler
from structman.reconcile.report import Report
from structman.structure.build import build
from structman.structure.models import ConfigError, StructureError, Tree
from structman.structure.schema import StructureConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BaseVerification:
    """Result of verifying one base directory.

    Attributes:
        base: Base directory that was verified.
        root: Resolved root path, None if resolution failed.
        report: Reconciliation report, None if the pass could not start.
        error: Resolution or configuration error, None otherwise.
    """

    base: BaseDirectory
    root: str | None
    report: Report | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        """True if the pass ran and recorded no conflicts or failures."""
        return self.error is None and self.report is not None and self.report.success


class StructureManager:
    """Verifies configured base directories against their structure.

    Attributes:
        _config: Loaded structure configuration.
        _reconciler: Reconciler used for every pass.
        _identifier: Application identifier for app-specific bases.
        _overrides: Explicit root paths keyed by base directory name.
    """

    def __init__(
        self,
        config: StructureConfig,
        *,
        dry_run: bool = False,
        identifier: str | None = None,
        overrides: dict[str, str] | None = None,
    ) -> None:
        """Initialize the StructureManager.

        Args:
            config: Loaded structure configuration.
            dry_run: If True, report what would change without changing it.
            identifier: Override for the configured application identifier.
            overrides: Root overrides, merged over the configured roots.
        """
        self._config = config
        self._reconciler = Reconciler(dry_run=dry_run)
        self._identifier = identifier or config.identifier
        self._overrides = {**config.roots, **(overrides or {})}

    def resolve_root(self, base: BaseDirectory) -> str:
        """Resolve the root path of a base directory.

        Args:
            base: Base directory to resolve.

        Returns:
            Root path as a string.

        Raises:
            PathResolutionError: If the base cannot be resolved.
        """
        return str(resolve_base_dir(base, self._identifier, self._overrides))

    def tree_for(self, base: BaseDirectory) -> Tree:
        """Build the structure tree declared for a base directory.

        Args:
            base: Base directory to look up.

        Returns:
            Root node of the base's structure.

        Raises:
            StructureError: If the base has no structure configured.
            ConfigError: If the declared structure is invalid.
        """
        item = self._config.get_item(base)
        if item is None:
            msg = f"Structure configuration for '{base.value}' not found"
            raise StructureError(msg)
        return build(item)

    def verify(self, base: BaseDirectory) -> Report:
        """Reconcile a single base directory.

        The tree is built before any filesystem access, so configuration
        errors abort the pass without touching the disk.

        Args:
            base: Base directory to verify.

        Returns:
            Reconciliation report for the base.

        Raises:
            StructureError: If the base is not configured or invalid.
            PathResolutionError: If the base cannot be resolved.
        """
        tree = self.tree_for(base)
        root = self.resolve_root(base)
        logger.debug("Verifying %s at %s", base.value, root)
        return self._reconciler.reconcile(root, tree)

    def verify_all(self, bases: list[BaseDirectory] | None = None) -> list[BaseVerification]:
        """Reconcile every configured base directory.

        Every tree is built before the first base is reconciled, so an
        invalid structure in any base leaves the filesystem untouched.
        Unconfigured and unresolvable bases are captured per base and do
        not prevent the others from being verified.

        Args:
            bases: Bases to verify. Defaults to every configured base.

        Returns:
            One BaseVerification per base, in order.

        Raises:
            ConfigError: If the structure of any requested base is invalid.
        """
        targets = bases if bases is not None else self._config.configured_bases()

        trees: dict[BaseDirectory, Tree | str] = {}
        for base in targets:
            try:
                trees[base] = self.tree_for(base)
            except ConfigError as e:
                msg = f"Invalid structure for '{base.value}': {e}"
                raise ConfigError(msg) from e
            except StructureError as e:
                trees[base] = str(e)

        results: list[BaseVerification] = []
        for base in targets:
            try:
                root = self.resolve_root(base)
            except PathResolutionError as e:
                logger.warning("Skipping %s: %s", base.value, e)
                results.append(BaseVerification(base=base, root=None, error=str(e)))
                continue

            tree = trees[base]
            if isinstance(tree, str):
                results.append(BaseVerification(base=base, root=root, error=tree))
                continue

            logger.debug("Verifying %s at %s", base.value, root)
            report = self._reconciler.reconcile(root, tree)
            results.append(BaseVerification(base=base, root=root, report=report))

        return results

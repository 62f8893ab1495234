"""Per-package installation pipeline and the run-wide help-tag pass."""

import asyncio

from .buildsys import BuildSystem
from .depends import DependencyRecord
from .docs import DocCollector
from .errors import CollaboratorError, InstallConflictError, MissingDirectoryError, PackageError
from .helptags import HelpTagGenerator
from .install import SymlinkInstaller
from .logging import get_logger
from .models import Manifest, ManifestKind, Package, PackageResult, ResolvedAddon, RunReport
from .parse_manifest import parse_manifest
from .resolve_addons import AddonResolver

logger = get_logger("orchestrator")


class Orchestrator:
    """Installs the addons of every package, then generates help tags once."""

    def __init__(
        self,
        build_system: BuildSystem,
        tag_generator: HelpTagGenerator | None = None,
        max_concurrency: int = 4,
        generate_tags: bool = True,
    ):
        """Initialize orchestrator.

        Args:
            build_system: Source of packages and sink for build metadata
            tag_generator: Help-tag generator, defaults to ``helpztags``
            max_concurrency: Maximum packages processed at the same time
            generate_tags: Whether to run the help-tag pass at all
        """
        self.build_system = build_system
        self.tag_generator = tag_generator or HelpTagGenerator()
        self.max_concurrency = max_concurrency
        self.generate_tags = generate_tags

    async def run(self) -> RunReport:
        """Process all packages concurrently.

        Returns:
            Report with one result per package

        Raises:
            CollaboratorError: If build metadata or help tags cannot be written.
                Its ``report`` lists the packages that did finish.
        """
        packages = self.build_system.get_packages()
        collector = DocCollector()
        # Bound to the loop of this run only.
        semaphore = asyncio.Semaphore(self.max_concurrency)

        outcomes = await asyncio.gather(
            *(self.process_package(package, collector, semaphore) for package in packages),
            return_exceptions=True,
        )

        # Every package has finished here; fatal errors surface only now.
        results = [outcome for outcome in outcomes if isinstance(outcome, PackageResult)]
        errors = [outcome for outcome in outcomes if isinstance(outcome, BaseException)]

        report = RunReport(results=results, doc_dirs=collector.sorted_dirs())
        for result in report.failed:
            logger.error("%s failed", result.package.name)

        for error in errors:
            if not isinstance(error, CollaboratorError):
                raise error
        if errors:
            for error in errors[1:]:
                logger.error("%s", error)
            errors[0].report = report
            raise errors[0]

        if report.doc_dirs and self.generate_tags:
            try:
                await asyncio.to_thread(self.tag_generator.generate, report.doc_dirs)
            except CollaboratorError as e:
                e.report = report
                raise
            report.helptags_generated = True
        elif report.doc_dirs:
            logger.info("Skipping help tags for %d doc director(ies)", len(report.doc_dirs))

        return report

    async def process_package(
        self, package: Package, collector: DocCollector, semaphore: asyncio.Semaphore
    ) -> PackageResult:
        """Run one package's pipeline in a worker thread."""
        async with semaphore:
            return await asyncio.to_thread(self.install_package, package, collector)

    def install_package(self, package: Package, collector: DocCollector) -> PackageResult:
        """Parse, resolve, install and collect for a single package.

        Per-package errors end up in the returned result rather than being
        raised.
        """
        result = PackageResult(package=package)

        try:
            manifests = self._parse_manifests(package)
        except PackageError as e:
            result.errors.append(str(e))
            return result

        resolved: dict[ManifestKind, list[ResolvedAddon]] = {}
        resolver = AddonResolver(package.staged_dir, package.name)
        for manifest in manifests:
            try:
                resolved[manifest.kind] = resolver.resolve(manifest)
            except MissingDirectoryError as e:
                result.errors.append(str(e))
        if result.errors:
            return result

        installer = SymlinkInstaller(package.staged_dir, package.name)
        try:
            for addons in resolved.values():
                for addon in addons:
                    installer.install(addon)
                    result.installed.append(addon)
        except InstallConflictError as e:
            result.errors.append(str(e))
            return result

        for addon in result.installed:
            doc_dir = collector.collect(addon)
            if doc_dir is not None:
                result.doc_dirs.append(doc_dir)

        record = DependencyRecord()
        for kind, addons in resolved.items():
            if addons:
                record.record(kind.family)
        result.dependency = record.render()
        if result.dependency:
            self.build_system.record_dependency(package, result.dependency)

        self.build_system.mark_processed(package)
        logger.info("%s: installed %d addon(s)", package.name, len(result.installed))
        return result

    def _parse_manifests(self, package: Package) -> list[Manifest]:
        manifests = []
        for kind in ManifestKind:
            if not self.build_system.is_kind_enabled(package, kind):
                logger.debug("%s: %s manifests disabled", package.name, kind.suffix)
                continue
            try:
                source = self.build_system.read_manifest(package, kind)
                if source is None:
                    continue
                manifests.append(parse_manifest(source.content, kind, source.filename))
            except PackageError as e:
                e.package = package.name
                raise
        return manifests

"""Factory for wiring the stash catalog and sequencer from configuration."""

from stashmark.config import StashmarkConfig
from stashmark.stash.catalog import StashCatalog
from stashmark.stash.markers import StashMarker
from stashmark.stash.sequencer import StashSequencer
from stashmark.vcs.base import FileStager, VCSExecutor
from stashmark.vcs.git.executor import GitExecutor
from stashmark.vcs.git.staging import GitFileStager


class StashFactory:
    """Creates stash components that share one executor and marker."""

    @staticmethod
    def create_executor(config: StashmarkConfig) -> VCSExecutor:
        """Create the git executor.

        Args:
            config: Application configuration

        Returns:
            Executor running the configured git binary
        """
        return GitExecutor(config.git_executable)

    @staticmethod
    def create_catalog(config: StashmarkConfig, executor: VCSExecutor | None = None) -> StashCatalog:
        """Create a stash catalog.

        Args:
            config: Application configuration
            executor: Executor to use (default: a new GitExecutor)

        Returns:
            Catalog recognising entries with the configured marker
        """
        return StashCatalog(
            executor or StashFactory.create_executor(config),
            StashMarker(config.stash_marker),
        )

    @staticmethod
    def create_sequencer(
        config: StashmarkConfig,
        executor: VCSExecutor | None = None,
        stager: FileStager | None = None,
    ) -> StashSequencer:
        """Create a stash sequencer and the catalog it resolves entries with.

        Args:
            config: Application configuration
            executor: Executor to use (default: a new GitExecutor)
            stager: File stager to use (default: GitFileStager on the same executor)

        Returns:
            Sequencer whose `catalog` attribute shares its executor
        """
        executor = executor or StashFactory.create_executor(config)
        catalog = StashFactory.create_catalog(config, executor)
        return StashSequencer(
            executor,
            catalog,
            stager or GitFileStager(executor),
            sign_moved_entries=config.sign_moved_entries,
        )

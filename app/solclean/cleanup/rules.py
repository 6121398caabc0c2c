"""Deletion rules: which folder categories may be removed.

This module defines the immutable rule set consulted by discovery and
the orchestrator, along with the conventional folder names belonging
to each category.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

# Conventional folder names per category
BIN_FOLDER = "bin"
OBJ_FOLDER = "obj"
PACKAGES_FOLDER = "packages"
TEST_RESULTS_FOLDER = "TestResults"
IDE_METADATA_FOLDER = ".vs"

# Folders below the external (profile) root
EXTERNAL_LOG_FOLDER = "Logs"
EXTERNAL_TRACE_FOLDER = "TraceLogFiles"

BUILD_OUTPUT_FOLDERS: tuple[str, ...] = (BIN_FOLDER, OBJ_FOLDER)


class DeletionRuleSet(BaseModel):
    """Snapshot of the folder categories eligible for deletion.

    Instances are frozen. The orchestrator takes one snapshot per pass,
    so edits to the settings file never affect a pass in progress.

    Attributes:
        delete_build_output_folders: Delete ``bin`` and ``obj`` folders.
        delete_dependency_cache_folder: Delete ``packages`` folders.
        delete_test_results_folder: Delete ``TestResults`` folders.
        delete_ide_metadata_folder: Delete ``.vs`` folders.
        delete_external_log_folder: Delete ``Logs`` under the external root.
        delete_external_trace_folder: Delete ``TraceLogFiles`` under the external root.
        run_host_native_clean: Also run the host's own clean action.
        run_on_workspace_close: Run a cleanup when the workspace closes.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    delete_build_output_folders: Annotated[
        bool, Field(description="Delete the bin and obj folders")
    ] = True
    delete_dependency_cache_folder: Annotated[
        bool, Field(description="Delete the packages folder")
    ] = False
    delete_test_results_folder: Annotated[
        bool, Field(description="Delete the TestResults folders")
    ] = False
    delete_ide_metadata_folder: Annotated[
        bool, Field(description="Delete the .vs folders")
    ] = False
    delete_external_log_folder: Annotated[
        bool, Field(description="Delete the external Logs folder")
    ] = False
    delete_external_trace_folder: Annotated[
        bool, Field(description="Delete the external TraceLogFiles folder")
    ] = False
    run_host_native_clean: Annotated[
        bool, Field(description="Execute the default clean command")
    ] = True
    run_on_workspace_close: Annotated[
        bool, Field(description="Run the cleanup when the workspace closes")
    ] = False

    def project_folder_names(self) -> frozenset[str]:
        """Names of the in-project folders enabled by this rule set."""
        names: set[str] = set()
        if self.delete_build_output_folders:
            names.update(BUILD_OUTPUT_FOLDERS)
        if self.delete_dependency_cache_folder:
            names.add(PACKAGES_FOLDER)
        if self.delete_test_results_folder:
            names.add(TEST_RESULTS_FOLDER)
        if self.delete_ide_metadata_folder:
            names.add(IDE_METADATA_FOLDER)
        return frozenset(names)

    def external_folder_names(self) -> tuple[str, ...]:
        """Names of the enabled folders under the external root, in fixed order."""
        names: list[str] = []
        if self.delete_external_log_folder:
            names.append(EXTERNAL_LOG_FOLDER)
        if self.delete_external_trace_folder:
            names.append(EXTERNAL_TRACE_FOLDER)
        return tuple(names)

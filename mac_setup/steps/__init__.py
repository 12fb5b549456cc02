from .step_10_xcode_clt import XcodeCLTStep
from .step_20_homebrew import HomebrewStep
from .step_30_brew_bundle import BrewBundleStep
from .step_40_import_defaults import ImportDefaultsStep
from .step_50_install_archive_app import InstallArchiveAppStep
from .step_60_apply_configs import ApplyConfigFileStep, karabiner_step, vscode_settings_step
from .step_80_vscode_extensions import VSCodeExtensionsStep

__all__ = [
    "XcodeCLTStep",
    "HomebrewStep",
    "BrewBundleStep",
    "ImportDefaultsStep",
    "InstallArchiveAppStep",
    "ApplyConfigFileStep",
    "karabiner_step",
    "vscode_settings_step",
    "VSCodeExtensionsStep",
]

from .step_10_preflight import PreflightStep
from .step_15_select_disks import SelectDisksStep
from .step_20_install_deps import InstallDependenciesStep
from .step_30_partition import PartitionDisksStep
from .step_40_format import FormatPartitionsStep
from .step_50_mount import MountTargetStep
from .step_60_build_recovery import BuildRecoveryStep
from .step_70_install_base import InstallBaseStep
from .step_80_bootloader import InstallBootloaderStep
from .step_90_configure_system import ConfigureSystemStep
from .step_95_set_password import SetRootPasswordStep

__all__ = [
    "PreflightStep",
    "SelectDisksStep",
    "InstallDependenciesStep",
    "PartitionDisksStep",
    "FormatPartitionsStep",
    "MountTargetStep",
    "BuildRecoveryStep",
    "InstallBaseStep",
    "InstallBootloaderStep",
    "ConfigureSystemStep",
    "SetRootPasswordStep",
]

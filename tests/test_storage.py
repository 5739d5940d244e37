"""Tests for partition plans, formatting and mounting."""
import pytest

from arch_oem_installer.lib.storage import (
    Filesystem,
    PartitionSpec,
    TargetLayout,
    apply_partition_plan,
    format_partition,
    home_disk_plan,
    main_disk_plan,
    mount_hierarchy,
    rescan_disks,
    target_filesystems,
)


class TestPlans:
    def test_main_disk_layout_is_fixed(self):
        plan = main_disk_plan("50G")

        assert [(p.index, p.size, p.typecode, p.label) for p in plan] == [
            (1, "+1G", "ef00", "EFI_System"),
            (2, "+10G", "8300", "Recovery_Image"),
            (3, "+1G", "8300", "Arch_Var"),
            (4, "+50G", "8300", "Arch_Root"),
        ]

    def test_leading_plus_is_not_doubled(self):
        assert main_disk_plan("+120G")[-1].size == "+120G"

    def test_empty_root_size_rejected(self):
        with pytest.raises(ValueError):
            main_disk_plan("  ")

    def test_home_disk_spans_whole_disk(self):
        assert home_disk_plan() == [PartitionSpec(1, "0", "8300", "Arch_Home")]


class TestApplyPartitionPlan:
    def test_zaps_then_creates_in_order(self, fake_tools):
        apply_partition_plan("/dev/nvme0n1", main_disk_plan("50G"))

        assert fake_tools.calls == [
            ["sgdisk", "-Z", "/dev/nvme0n1"],
            ["sgdisk", "-n", "1:0:+1G", "-t", "1:ef00", "-c", "1:EFI_System", "/dev/nvme0n1"],
            ["sgdisk", "-n", "2:0:+10G", "-t", "2:8300", "-c", "2:Recovery_Image", "/dev/nvme0n1"],
            ["sgdisk", "-n", "3:0:+1G", "-t", "3:8300", "-c", "3:Arch_Var", "/dev/nvme0n1"],
            ["sgdisk", "-n", "4:0:+50G", "-t", "4:8300", "-c", "4:Arch_Root", "/dev/nvme0n1"],
        ]

    def test_partition_failure_propagates(self, fake_tools):
        fake_tools.fail_on = "sgdisk"

        with pytest.raises(RuntimeError, match="Command failed"):
            apply_partition_plan("/dev/sda", home_disk_plan())

        assert len(fake_tools.calls) == 1

    def test_rescan_probes_each_disk(self, fake_tools):
        rescan_disks(["/dev/nvme0n1", "/dev/sda"])

        assert fake_tools.calls == [["partprobe", "/dev/nvme0n1"], ["partprobe", "/dev/sda"]]


class TestLayout:
    def test_nvme_main_and_sata_home(self):
        layout = TargetLayout.for_disks("/dev/nvme0n1", "/dev/sda")

        assert layout.as_dict() == {
            "boot": "/dev/nvme0n1p1",
            "recovery": "/dev/nvme0n1p2",
            "var": "/dev/nvme0n1p3",
            "root": "/dev/nvme0n1p4",
            "home": "/dev/sda1",
        }

    def test_recovery_partition_is_not_formatted(self):
        layout = TargetLayout.for_disks("/dev/sda", "/dev/sdb")

        devices = [fs.device for fs in target_filesystems(layout)]

        assert layout.recovery not in devices
        assert devices == ["/dev/sda1", "/dev/sda4", "/dev/sda3", "/dev/sdb1"]


class TestFormatPartition:
    def test_vfat(self, fake_tools):
        format_partition(Filesystem("/dev/sda1", "vfat", "BOOT"))

        assert fake_tools.calls == [["mkfs.fat", "-F32", "-n", "BOOT", "/dev/sda1"]]

    def test_ext4(self, fake_tools):
        format_partition(Filesystem("/dev/sda4", "ext4", "ROOT"))

        assert fake_tools.calls == [["mkfs.ext4", "-F", "-L", "ROOT", "/dev/sda4"]]

    def test_unknown_type(self, fake_tools):
        with pytest.raises(ValueError, match="Unsupported filesystem"):
            format_partition(Filesystem("/dev/sda4", "btrfs", "ROOT"))
        assert fake_tools.calls == []


class TestMountHierarchy:
    def test_root_is_mounted_first(self, fake_tools, tmp_path):
        layout = TargetLayout.for_disks("/dev/nvme0n1", "/dev/sda")
        mnt = tmp_path / "mnt"
        mnt.mkdir()

        mount_hierarchy(layout, str(mnt))

        mounts = fake_tools.commands("mount")
        assert mounts == [
            ["mount", "/dev/nvme0n1p4", str(mnt)],
            ["mount", "/dev/nvme0n1p1", str(mnt / "boot")],
            ["mount", "/dev/nvme0n1p3", str(mnt / "var")],
            ["mount", "/dev/sda1", str(mnt / "home")],
        ]
        assert (mnt / "boot").is_dir()

    def test_creates_missing_mount_point(self, fake_tools, tmp_path):
        layout = TargetLayout.for_disks("/dev/nvme0n1", "/dev/sda")
        target = tmp_path / "target"

        mount_hierarchy(layout, str(target))

        assert fake_tools.calls[:2] == [
            ["mkdir", "-p", str(target)],
            ["mount", "/dev/nvme0n1p4", str(target)],
        ]
        assert target.is_dir()

    def test_dry_run_issues_nothing(self, fake_tools, tmp_path):
        mount_hierarchy(TargetLayout.for_disks("/dev/sda", "/dev/sdb"), str(tmp_path / "target"), dry_run=True)

        assert fake_tools.calls == []

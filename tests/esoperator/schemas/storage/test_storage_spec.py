import unittest
from pydantic import ValidationError
from esoperator.schemas.storage.storage import StorageKind, StorageSpec
from esoperator.schemas.storage.host_path import HostPathStorageConfig
from esoperator.schemas.storage.empty_dir import EmptyDirStorageConfig
from esoperator.schemas.storage.claim_template import VolumeClaimTemplateConfig
from esoperator.schemas.storage.existing_claim import ExistingClaimStorageConfig


HOST_PATH = {"path": "/var/lib/es"}
EMPTY_DIR = {"medium": "Memory"}
CLAIM_TEMPLATE = {"name": "data", "spec": {"storage": "10Gi"}}
EXISTING_CLAIM = {"claim_name": "es-data"}


class TestStorageSpec(unittest.TestCase):
    """
    Unit tests for StorageSpec variant selection
    """

    def test_no_variant(self):
        """ Test an empty storage spec selects nothing """
        spec = StorageSpec()
        self.assertIsNone(spec.kind())
        self.assertIsNone(spec.selected())
        self.assertEqual(spec.populated(), ())

    def test_single_variants(self):
        """ Test each variant alone is selected """
        cases = [
            ("host_path", HOST_PATH, StorageKind.HOST_PATH, HostPathStorageConfig),
            ("empty_dir", EMPTY_DIR, StorageKind.EMPTY_DIR, EmptyDirStorageConfig),
            ("volume_claim_template", CLAIM_TEMPLATE, StorageKind.VOLUME_CLAIM_TEMPLATE, VolumeClaimTemplateConfig),
            ("persistent_volume_claim", EXISTING_CLAIM, StorageKind.PERSISTENT_VOLUME_CLAIM, ExistingClaimStorageConfig),
        ]
        for field, value, kind, schema_cls in cases:
            with self.subTest(field=field):
                spec = StorageSpec(**{field: value})
                self.assertEqual(spec.kind(), kind)
                self.assertIsInstance(spec.selected(), schema_cls)

    def test_host_path_wins_over_all(self):
        """ Test host path has precedence when every variant is populated """
        spec = StorageSpec(
            host_path=HOST_PATH,
            empty_dir=EMPTY_DIR,
            volume_claim_template=CLAIM_TEMPLATE,
            persistent_volume_claim=EXISTING_CLAIM,
        )
        self.assertEqual(spec.kind(), StorageKind.HOST_PATH)
        self.assertEqual(spec.populated(), tuple(StorageKind))

    def test_precedence_order(self):
        """ Test empty dir beats claim template, which beats existing claim """
        spec = StorageSpec(empty_dir=EMPTY_DIR, volume_claim_template=CLAIM_TEMPLATE)
        self.assertEqual(spec.kind(), StorageKind.EMPTY_DIR)
        spec = StorageSpec(volume_claim_template=CLAIM_TEMPLATE, persistent_volume_claim=EXISTING_CLAIM)
        self.assertEqual(spec.kind(), StorageKind.VOLUME_CLAIM_TEMPLATE)

    def test_unknown_variant_rejected(self):
        """ Test unknown storage fields raise a validation error """
        with self.assertRaises(ValidationError):
            StorageSpec(nfs={"server": "10.0.0.1"})


class TestStorageVariantSchemas(unittest.TestCase):
    """
    Unit tests for the storage variant schemas
    """

    def test_host_path_must_be_absolute(self):
        """ Test relative host paths are rejected """
        with self.assertRaises(ValidationError):
            HostPathStorageConfig(path="var/lib/es")

    def test_host_path_normalized(self):
        """ Test host paths are normalized """
        self.assertEqual(HostPathStorageConfig(path="/var/lib//es/").path, "/var/lib/es")

    def test_claim_template_defaults(self):
        """ Test claim template defaults to ReadWriteOnce """
        template = VolumeClaimTemplateConfig(**CLAIM_TEMPLATE)
        self.assertEqual(template.spec.access_modes, ["ReadWriteOnce"])
        self.assertIsNone(template.spec.storage_class_name)

    def test_claim_template_requires_storage(self):
        """ Test claim template spec requires a storage request """
        with self.assertRaises(ValidationError):
            VolumeClaimTemplateConfig(name="data", spec={})

    def test_claim_template_access_modes(self):
        """ Test unknown or empty access modes are rejected """
        with self.assertRaises(ValidationError):
            VolumeClaimTemplateConfig(name="data", spec={"storage": "1Gi", "access_modes": ["ReadWriteSometimes"]})
        with self.assertRaises(ValidationError):
            VolumeClaimTemplateConfig(name="data", spec={"storage": "1Gi", "access_modes": []})

    def test_claim_template_requires_name(self):
        """ Test claim template name cannot be empty """
        with self.assertRaises(ValidationError):
            VolumeClaimTemplateConfig(name="", spec={"storage": "1Gi"})

    def test_existing_claim_defaults(self):
        """ Test existing claims are mounted read-write by default """
        self.assertFalse(ExistingClaimStorageConfig(**EXISTING_CLAIM).read_only)

    def test_empty_dir_medium(self):
        """ Test empty dir only accepts known media """
        with self.assertRaises(ValidationError):
            EmptyDirStorageConfig(medium="Disk")

    def test_claim_template_storage_quantity(self):
        """ Test claim template storage must be a Kubernetes quantity """
        with self.assertRaises(ValidationError):
            VolumeClaimTemplateConfig(name="data", spec={"storage": "fifty"})
        self.assertEqual(VolumeClaimTemplateConfig(name="data", spec={"storage": 50}).spec.storage, "50")

    def test_empty_dir_size_limit_quantity(self):
        """ Test empty dir size limit must be a Kubernetes quantity """
        with self.assertRaises(ValidationError):
            EmptyDirStorageConfig(size_limit="lots")
        self.assertEqual(EmptyDirStorageConfig(size_limit="5Gi").size_limit, "5Gi")

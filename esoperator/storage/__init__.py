""" Runtime storage of Elasticsearch nodes. Importing this package registers all storage variants. """

from esoperator.storage.backend import NodeStorage
from esoperator.storage.registry import build_storage, register_storage
from esoperator.storage.host_path import HostPathStorage
from esoperator.storage.empty_dir import EmptyDirStorage
from esoperator.storage.claim_template import ClaimTemplateStorage
from esoperator.storage.existing_claim import ExistingClaimStorage

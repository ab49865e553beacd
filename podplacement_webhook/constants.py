# Scheduling gate held on new pods until architecture resolution completes
SCHEDULING_GATE_NAME = "multiarch.openshift.io/scheduling-gate"

# Bookkeeping labels read by the gate-removal controller
SCHEDULING_GATE_LABEL = "multiarch.openshift.io/scheduling-gate"
SCHEDULING_GATE_LABEL_VALUE_GATED = "gated"
SCHEDULING_GATE_LABEL_VALUE_REMOVED = "removed"

NODE_AFFINITY_LABEL = "multiarch.openshift.io/node-affinity"
NODE_AFFINITY_LABEL_VALUE_UNSET = "unset"
NODE_AFFINITY_LABEL_VALUE_SET = "set"

# Namespaces hosting infrastructure pods
EXEMPT_NAMESPACE_PREFIXES = ("openshift-", "hypershift-", "kube-")
DEFAULT_OPERATOR_NAMESPACE = "openshift-multiarch-manager-operator"
SERVICE_ACCOUNT_NAMESPACE_FILE = "/var/run/secrets/kubernetes.io/serviceaccount/namespace"

# Admission endpoint and registration
WEBHOOK_PATH = "/add-pod-scheduling-gate"
WEBHOOK_NAME = "pod-placement-scheduling-gate.multiarch.openshift.io"
WEBHOOK_CONFIGURATION_NAME = "pod-placement-scheduling-gate"
WEBHOOK_TIMEOUT_SECONDS = 10
ADMISSION_REVIEW_API_VERSION = "admission.k8s.io/v1"
ADMISSION_REVIEW_KIND = "AdmissionReview"
JSON_PATCH_TYPE = "JSONPatch"

DEFAULT_BIND_ADDRESS = "0.0.0.0"
DEFAULT_WEBHOOK_PORT = 9443
DEFAULT_CERT_DIR = "/tmp/k8s-webhook-server/serving-certs"


def gated_pods_label_selector() -> str:
    """Label selector matching pods that still wait for architecture resolution."""
    return f"{SCHEDULING_GATE_LABEL}={SCHEDULING_GATE_LABEL_VALUE_GATED}"

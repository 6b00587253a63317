from prometheus_client import Counter, Histogram

DISTRIBUTION_COUNT = Counter(
    "corujo_distribution_total",
    "Pedidos de distribuição de clientes",
    ["policy", "categoria", "outcome"],
)

DISTRIBUTED_CLIENTS = Counter(
    "corujo_distributed_clients_total",
    "Clientes efetivamente distribuídos",
    ["policy", "categoria"],
)

DISTRIBUTION_DURATION = Histogram(
    "corujo_distribution_duration_seconds",
    "Duração da distribuição (inclui espera pelo lock da categoria)",
    ["policy"],
)

ATTENDANCE_COUNT = Counter(
    "corujo_attendance_total",
    "Transições de atendimento",
    ["status", "outcome"],
)

NOTIFIER_DEGRADED = Counter(
    "corujo_notifier_degraded_total",
    "Falhas absorvidas pelo notificador best-effort",
    ["channel", "permanent"],
)

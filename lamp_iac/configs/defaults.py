"""
Default task and routing specifications built from the constants.

The database, admin UI and web application containers are declared here in
the order they appear in the task definition.
"""

from lamp_iac.configs.constants import (
    APP_HOST_HEADER,
    DATABASE,
    DEFAULT_TARGET_GROUP,
    HEALTH_CHECK,
    HTML_DOCUMENT_ROOT,
    HTML_VOLUME,
    IMAGE_REGISTRY,
    IMAGE_TAGS,
    LISTENER_PORT,
    PHP_STARTUP_COMMAND,
    PORTS,
)
from lamp_iac.configs.schemas import (
    ContainerSpec,
    HealthCheckSpec,
    ListenerRuleSpec,
    MountPoint,
    PortMapping,
    RoutingSpec,
    TargetGroupSpec,
    TaskSpec,
)

# Keys inside the database credentials secret
ROOT_PASSWORD_KEY = "root_password"
USER_PASSWORD_KEY = "user_password"


def image_ref(name: str, tag: str) -> str:
    """Build a public ECR image reference."""
    return f"{IMAGE_REGISTRY}/{name}:{tag}"


def default_task_spec(
    family: str = "lamp",
    image_tags: dict[str, str] | None = None,
) -> TaskSpec:
    """
    Build the three-container LAMP task specification.

    Args:
        family: Task definition family name
        image_tags: Overrides for the mysql, phpmyadmin and php image tags

    Returns:
        Validated TaskSpec
    """
    tags = {**IMAGE_TAGS, **(image_tags or {})}

    mysql = ContainerSpec(
        name=DATABASE["host"],
        image=image_ref("mysql", tags["mysql"]),
        memory_mib=1024,
        cpu=512,
        environment={
            "MYSQL_DATABASE": DATABASE["name"],
            "MYSQL_USER": DATABASE["user"],
        },
        secrets={
            "MYSQL_ROOT_PASSWORD": ROOT_PASSWORD_KEY,
            "MYSQL_PASSWORD": USER_PASSWORD_KEY,
        },
        port_mappings=(PortMapping(container_port=PORTS["mysql"], host_port=PORTS["mysql"]),),
        log_stream_prefix="mysql",
    )

    phpmyadmin = ContainerSpec(
        name="phpmyadmin-container",
        image=image_ref("phpmyadmin", tags["phpmyadmin"]),
        memory_mib=256,
        cpu=128,
        environment={
            "PMA_HOST": DATABASE["host"],
            "PMA_PORT": DATABASE["port"],
        },
        secrets={"MYSQL_ROOT_PASSWORD": ROOT_PASSWORD_KEY},
        port_mappings=(PortMapping(container_port=PORTS["http"], host_port=PORTS["dbadmin"]),),
        log_stream_prefix="phpmyadmin",
    )

    php_apache = ContainerSpec(
        name="php-apache-container",
        image=image_ref("php", tags["php"]),
        memory_mib=256,
        cpu=384,
        environment={
            "DB_HOST": DATABASE["host"],
            "DB_USER": DATABASE["user"],
            "DB_NAME": DATABASE["name"],
        },
        secrets={"DB_PASSWORD": USER_PASSWORD_KEY},
        port_mappings=(PortMapping(container_port=PORTS["http"], host_port=PORTS["app"]),),
        mount_points=(
            MountPoint(source_volume=HTML_VOLUME, container_path=HTML_DOCUMENT_ROOT),
        ),
        command=tuple(PHP_STARTUP_COMMAND),
        log_stream_prefix="php-apache",
    )

    return TaskSpec(
        family=family,
        containers=(mysql, phpmyadmin, php_apache),
        volumes=(HTML_VOLUME,),
    )


def default_routing_spec(app_host_header: str = APP_HOST_HEADER) -> RoutingSpec:
    """
    Build the listener routing: admin UI by default, the app by host header.

    Args:
        app_host_header: Hostname routed to the web application target group

    Returns:
        Validated RoutingSpec
    """
    health_check = HealthCheckSpec(
        path=str(HEALTH_CHECK["path"]),
        interval=int(HEALTH_CHECK["interval"]),
    )
    return RoutingSpec(
        listener_port=LISTENER_PORT,
        default_target_group=DEFAULT_TARGET_GROUP,
        target_groups=(
            TargetGroupSpec(name="dbadmin", port=PORTS["dbadmin"], health_check=health_check),
            TargetGroupSpec(name="app", port=PORTS["app"], health_check=health_check),
        ),
        rules=(
            ListenerRuleSpec(priority=1, host_headers=(app_host_header,), target_group="app"),
        ),
    )

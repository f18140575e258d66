"""
Compute components for the ECS cluster and workload.

Components:
- EcsClusterComponent: Cluster, launch template, ASG, capacity provider
- TaskDefinitionComponent: LAMP container set and its log group
- EcsServiceComponent: Service keeping the task running
"""

from lamp_iac.components.compute.ecs_cluster import EcsClusterComponent, EcsClusterOutputs
from lamp_iac.components.compute.task_definition import (
    TaskDefinitionComponent,
    TaskDefinitionOutputs,
    render_container_definitions,
)
from lamp_iac.components.compute.ecs_service import EcsServiceComponent, EcsServiceOutputs

__all__ = [
    "EcsClusterComponent",
    "EcsClusterOutputs",
    "TaskDefinitionComponent",
    "TaskDefinitionOutputs",
    "render_container_definitions",
    "EcsServiceComponent",
    "EcsServiceOutputs",
]

"""
Pulumi infrastructure-as-code for a LAMP stack on ECS.

This package defines AWS infrastructure including:
- Security groups with CIDR allow-lists inside an existing VPC
- ECS cluster backed by an EC2 Auto Scaling Group capacity provider
- MySQL, phpMyAdmin and PHP/Apache containers in one task definition
- Internet-facing ALB with host-header routing
- Route 53 wildcard alias record
"""

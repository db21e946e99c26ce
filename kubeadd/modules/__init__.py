from .add import add_cluster
from .delete import delete_cluster

__all__ = ['add_cluster', 'delete_cluster']

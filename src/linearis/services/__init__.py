"""Per-entity operations: resolve references, send one request, reshape the response."""

from linearis.services.attachments import AttachmentsService
from linearis.services.cycles import CyclesService
from linearis.services.documents import DocumentsService
from linearis.services.embeds import EmbedsService
from linearis.services.issues import IssuesService
from linearis.services.milestones import MilestonesService
from linearis.services.projects import ProjectsService
from linearis.services.workspace import CommentsService, LabelsService, TeamsService, UsersService

__all__ = [
    "AttachmentsService",
    "CommentsService",
    "CyclesService",
    "DocumentsService",
    "EmbedsService",
    "IssuesService",
    "LabelsService",
    "MilestonesService",
    "ProjectsService",
    "TeamsService",
    "UsersService",
]

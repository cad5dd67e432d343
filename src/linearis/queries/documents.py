"""
GraphQL queries and mutations for Linear documents.

Documents belong to projects or teams, never to issues. Linking a document
to an issue goes through an attachment pointing at the document URL.
"""

DOCUMENT_FRAGMENT = """
  id
  title
  content
  slugId
  url
  icon
  color
  createdAt
  updatedAt
  creator {
    id
    name
  }
  project {
    id
    name
  }
  trashed
"""

CREATE_DOCUMENT_MUTATION = f"""
  mutation DocumentCreate($input: DocumentCreateInput!) {{
    documentCreate(input: $input) {{
      success
      document {{
        {DOCUMENT_FRAGMENT}
      }}
    }}
  }}
"""

UPDATE_DOCUMENT_MUTATION = f"""
  mutation DocumentUpdate($id: String!, $input: DocumentUpdateInput!) {{
    documentUpdate(id: $id, input: $input) {{
      success
      document {{
        {DOCUMENT_FRAGMENT}
      }}
    }}
  }}
"""

GET_DOCUMENT_QUERY = f"""
  query GetDocument($id: String!) {{
    document(id: $id) {{
      {DOCUMENT_FRAGMENT}
    }}
  }}
"""

LIST_DOCUMENTS_QUERY = f"""
  query ListDocuments($first: Int!, $filter: DocumentFilter) {{
    documents(first: $first, filter: $filter) {{
      nodes {{
        {DOCUMENT_FRAGMENT}
      }}
    }}
  }}
"""

# Soft delete: the document is moved to trash
DELETE_DOCUMENT_MUTATION = """
  mutation DocumentDelete($id: String!) {
    documentDelete(id: $id) {
      success
    }
  }
"""

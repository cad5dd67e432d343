"""
GraphQL queries and mutations for Linear attachments.

Creating an attachment with a url + issueId pair that already exists updates
the existing record instead of adding a duplicate.
"""

ATTACHMENT_FRAGMENT = """
  id
  title
  subtitle
  url
  createdAt
  updatedAt
  issue {
    id
    identifier
    title
  }
  creator {
    id
    name
  }
"""

CREATE_ATTACHMENT_MUTATION = f"""
  mutation AttachmentCreate($input: AttachmentCreateInput!) {{
    attachmentCreate(input: $input) {{
      success
      attachment {{
        {ATTACHMENT_FRAGMENT}
      }}
    }}
  }}
"""

DELETE_ATTACHMENT_MUTATION = """
  mutation AttachmentDelete($id: String!) {
    attachmentDelete(id: $id) {
      success
    }
  }
"""

LIST_ATTACHMENTS_QUERY = f"""
  query ListAttachments($issueId: String!) {{
    issue(id: $issueId) {{
      attachments {{
        nodes {{
          {ATTACHMENT_FRAGMENT}
        }}
      }}
    }}
  }}
"""

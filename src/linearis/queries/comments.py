"""GraphQL mutations for comment operations."""

CREATE_COMMENT_MUTATION = """
  mutation CreateComment($input: CommentCreateInput!) {
    commentCreate(input: $input) {
      success
      comment {
        id
        body
        createdAt
        updatedAt
        user { id name }
      }
    }
  }
"""

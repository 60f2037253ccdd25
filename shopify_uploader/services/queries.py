"""GraphQL documents sent to the Shopify Admin API."""

STAGED_UPLOADS_CREATE = """
mutation($input: [StagedUploadInput!]!) {
  stagedUploadsCreate(input: $input) {
    stagedTargets { url resourceUrl parameters { name value } }
    userErrors { field message }
  }
}
"""

FILE_CREATE = """
mutation($files: [FileCreateInput!]!) {
  fileCreate(files: $files) {
    files {
      __typename
      ... on GenericFile { id url }
      ... on MediaImage  { id }
      ... on Video       { id }
    }
    userErrors { field message }
  }
}
"""

FILE_STATUS = """
query($id: ID!) {
  node(id: $id) {
    __typename
    ... on GenericFile {
      fileStatus
      url
    }
    ... on MediaImage {
      fileStatus
      image { url }
    }
    ... on Video {
      fileStatus
      sources { url format }
    }
  }
}
"""

"""Outbound Actions SDK conversation webhook payload (AppResponse) and rich items."""

from typing import Any, Optional

from fulfillment.schemas.conversation import WireModel


class SimpleResponse(WireModel):
    textToSpeech: Optional[str] = None
    ssml: Optional[str] = None
    displayText: Optional[str] = None


class Image(WireModel):
    url: Optional[str] = None
    accessibilityText: Optional[str] = None
    height: Optional[int] = None
    width: Optional[int] = None


class AndroidApp(WireModel):
    packageName: Optional[str] = None
    versions: Optional[list[dict[str, Any]]] = None


class OpenUrlAction(WireModel):
    url: Optional[str] = None
    androidApp: Optional[AndroidApp] = None
    urlTypeHint: Optional[str] = None


class Button(WireModel):
    title: Optional[str] = None
    openUrlAction: Optional[OpenUrlAction] = None


class BasicCard(WireModel):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    formattedText: Optional[str] = None
    image: Optional[Image] = None
    buttons: Optional[list[Button]] = None
    imageDisplayOptions: Optional[str] = None


class MediaObject(WireModel):
    name: Optional[str] = None
    description: Optional[str] = None
    contentUrl: Optional[str] = None
    largeImage: Optional[Image] = None
    icon: Optional[Image] = None


class MediaResponse(WireModel):
    mediaType: Optional[str] = None
    mediaObjects: Optional[list[MediaObject]] = None


class CarouselBrowseItem(WireModel):
    title: Optional[str] = None
    description: Optional[str] = None
    footer: Optional[str] = None
    image: Optional[Image] = None
    openUrlAction: Optional[OpenUrlAction] = None


class CarouselBrowse(WireModel):
    items: Optional[list[CarouselBrowseItem]] = None
    imageDisplayOptions: Optional[str] = None


class TableCardColumnProperties(WireModel):
    header: Optional[str] = None
    horizontalAlignment: Optional[str] = None


class TableCardCell(WireModel):
    text: Optional[str] = None


class TableCardRow(WireModel):
    cells: Optional[list[TableCardCell]] = None
    dividerAfter: Optional[bool] = None


class TableCard(WireModel):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    image: Optional[Image] = None
    columnProperties: Optional[list[TableCardColumnProperties]] = None
    rows: Optional[list[TableCardRow]] = None
    buttons: Optional[list[Button]] = None


class HtmlResponse(WireModel):
    updatedState: Optional[dict[str, Any]] = None
    suppressMic: Optional[bool] = None
    url: Optional[str] = None


class StructuredResponse(WireModel):
    orderUpdate: Optional[dict[str, Any]] = None
    orderUpdateV3: Optional[dict[str, Any]] = None


class RichResponseItem(WireModel):
    simpleResponse: Optional[SimpleResponse] = None
    basicCard: Optional[BasicCard] = None
    structuredResponse: Optional[StructuredResponse] = None
    mediaResponse: Optional[MediaResponse] = None
    carouselBrowse: Optional[CarouselBrowse] = None
    tableCard: Optional[TableCard] = None
    htmlResponse: Optional[HtmlResponse] = None


class Suggestion(WireModel):
    title: str


class LinkOutSuggestion(WireModel):
    destinationName: Optional[str] = None
    url: Optional[str] = None
    openUrlAction: Optional[OpenUrlAction] = None


class RichResponse(WireModel):
    items: Optional[list[RichResponseItem]] = None
    suggestions: Optional[list[Suggestion]] = None
    linkOutSuggestion: Optional[LinkOutSuggestion] = None


class OptionInfo(WireModel):
    key: str
    synonyms: Optional[list[str]] = None


class ListSelectListItem(WireModel):
    optionInfo: OptionInfo
    title: str
    description: Optional[str] = None
    image: Optional[Image] = None


class CarouselSelectCarouselItem(WireModel):
    optionInfo: OptionInfo
    title: str
    description: Optional[str] = None
    image: Optional[Image] = None


class ExpectedIntent(WireModel):
    intent: str
    inputValueData: Optional[dict[str, Any]] = None
    parameterName: Optional[str] = None


class InputPrompt(WireModel):
    richInitialPrompt: Optional[RichResponse] = None
    noInputPrompts: Optional[list[SimpleResponse]] = None


class ExpectedInput(WireModel):
    inputPrompt: Optional[InputPrompt] = None
    possibleIntents: Optional[list[ExpectedIntent]] = None
    speechBiasingHints: Optional[list[str]] = None


class FinalResponse(WireModel):
    richResponse: Optional[RichResponse] = None


class AppResponse(WireModel):
    conversationToken: Optional[str] = None
    userStorage: Optional[str] = None
    resetUserStorage: Optional[bool] = None
    expectUserResponse: Optional[bool] = None
    expectedInputs: Optional[list[ExpectedInput]] = None
    finalResponse: Optional[FinalResponse] = None
    customPushMessage: Optional[dict[str, Any]] = None
    isInSandbox: Optional[bool] = None

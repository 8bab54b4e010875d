"""Site navigation API schemas."""

from pydantic import BaseModel, Field

from site_content.application.dtos.navigation import NavLink, NavMenu, SiteNavigation


class NavLinkResponse(BaseModel):
    label: str
    url: str

    @classmethod
    def from_link(cls, link: NavLink) -> "NavLinkResponse":
        return cls(label=link.label, url=link.url)


class NavMenuResponse(BaseModel):
    label: str
    url: str
    children: list[NavLinkResponse] = Field(
        default_factory=list, description="Dropdown entries; empty for a plain link"
    )

    @classmethod
    def from_menu(cls, menu: NavMenu) -> "NavMenuResponse":
        return cls(
            label=menu.label,
            url=menu.url,
            children=[NavLinkResponse.from_link(c) for c in menu.children],
        )


class FooterSectionResponse(BaseModel):
    title: str
    links: list[NavLinkResponse]


class NavigationResponse(BaseModel):
    """Response for GET /navigation."""

    header: list[NavMenuResponse]
    about: list[NavLinkResponse]
    footer: list[FooterSectionResponse]

    @classmethod
    def from_navigation(cls, navigation: SiteNavigation) -> "NavigationResponse":
        return cls(
            header=[NavMenuResponse.from_menu(m) for m in navigation.header],
            about=[NavLinkResponse.from_link(link) for link in navigation.about],
            footer=[
                FooterSectionResponse(
                    title=section.title,
                    links=[NavLinkResponse.from_link(link) for link in section.links],
                )
                for section in navigation.footer
            ],
        )
